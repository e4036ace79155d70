"""Resolve signal paths to identifier codes by walking a ScopeTree.

Two addressing modes are supported and always agree:

- Name paths, as typed by a user or stored with a signal: "instance.cin" or
  ["instance", "cin"]. Every segment but the last names a scope; the last one
  names a variable.
- Index paths, as reported by a scope tree view paired with a variable list:
  scope_indices[0] is the synthetic root row (always 0), each further index
  counts scope children only, and variable_index counts the variable children
  of the reached scope only.
"""

from typing import List, Sequence, Tuple, Union

from .data_model import IdentifierCode, Scope, ScopeTree, Variable
from .errors import NotFound, TypeMismatch

PathLike = Union[str, Sequence[str]]


def split_path(path: PathLike) -> Tuple[str, ...]:
    """Normalize a dotted string or a sequence of names into a tuple of segments."""
    if isinstance(path, str):
        return tuple(path.split(".")) if path else ()
    return tuple(path)


def resolve_variable(tree: ScopeTree, path: PathLike) -> Variable:
    """Find the variable at a name path.

    Every segment but the last matches scope children only, the last one
    matches variable children only, so a scope and a variable may share a name.

    Raises:
        NotFound: if the path is empty or a segment does not exist
        TypeMismatch: if a segment exists only as the other kind of child
    """
    segments = split_path(path)
    if not segments:
        raise NotFound(segments, "empty signal path")

    scope = tree.root
    for depth, name in enumerate(segments[:-1]):
        child = scope.child_scope(name)
        if child is None:
            if scope.child_variable(name) is not None:
                raise TypeMismatch(segments[:depth + 1], "not a scope")
            raise NotFound(segments)
        scope = child

    variable = scope.child_variable(segments[-1])
    if variable is None:
        if scope.child_scope(segments[-1]) is not None:
            raise TypeMismatch(segments, "not a variable")
        raise NotFound(segments)
    return variable


def resolve(tree: ScopeTree, path: PathLike) -> IdentifierCode:
    """Map a name path to the variable's identifier code."""
    return resolve_variable(tree, path).identifier


def scope_at(tree: ScopeTree, scope_indices: Sequence[int]) -> Scope:
    """Find the scope addressed by a tree-view index path."""
    if not scope_indices or scope_indices[0] != 0:
        raise NotFound(scope_indices, "index path must start at the root row")

    scope = tree.root
    for depth, idx in enumerate(scope_indices[1:], start=1):
        children = scope.scopes()
        if not 0 <= idx < len(children):
            raise NotFound(scope_indices[:depth + 1], "no scope at index")
        scope = children[idx]
    return scope


def variables_at(tree: ScopeTree, scope_indices: Sequence[int]) -> List[Variable]:
    """Variables listed for a scope row, in declaration order."""
    return scope_at(tree, scope_indices).variables()


def resolve_index_variable(tree: ScopeTree, scope_indices: Sequence[int], variable_index: int) -> Variable:
    variables = variables_at(tree, scope_indices)
    if not 0 <= variable_index < len(variables):
        raise NotFound(list(scope_indices) + [variable_index], "no variable at index")
    return variables[variable_index]


def resolve_index(tree: ScopeTree, scope_indices: Sequence[int], variable_index: int) -> IdentifierCode:
    """Map a tree-view index path to the variable's identifier code."""
    return resolve_index_variable(tree, scope_indices, variable_index).identifier


def index_path(tree: ScopeTree, path: PathLike) -> Tuple[Tuple[int, ...], int]:
    """Translate a name path into the equivalent (scope_indices, variable_index)."""
    segments = split_path(path)
    # Validates the path and raises the same errors as name resolution
    variable = resolve_variable(tree, segments)

    scope = tree.root
    indices = [0]
    for name in segments[:-1]:
        children = scope.scopes()
        position = next(i for i, child in enumerate(children) if child.name == name)
        indices.append(position)
        scope = children[position]

    variable_index = next(i for i, var in enumerate(scope.variables()) if var is variable)
    return tuple(indices), variable_index


def path_for_index(tree: ScopeTree, scope_indices: Sequence[int], variable_index: int) -> Tuple[str, ...]:
    """Translate an index path into the equivalent name path."""
    variable = resolve_index_variable(tree, scope_indices, variable_index)
    names: List[str] = []
    scope = tree.root
    for idx in scope_indices[1:]:
        scope = scope.scopes()[idx]
        names.append(scope.name)
    names.append(variable.name)
    return tuple(names)
