"""Scope tree construction from VCD header tokens.

The pyvcd tokenizer reports the hierarchy as a flat token stream:

    $scope module tb $end          -> SCOPE     ScopeDecl(type_, ident)
    $var wire 1 ! clk $end         -> VAR       VarDecl(type_, size, id_code, reference, bit_index)
    $scope module instance $end    -> SCOPE
    $var wire 1 # cin $end         -> VAR
    $upscope $end                  -> UPSCOPE
    $upscope $end                  -> UPSCOPE
    $enddefinitions $end           -> ENDDEFINITIONS

build_scope_tree() folds it into nested Scope/Variable items under a synthetic
root, so that top-level scopes (and unscoped variables) share one parent and
every node is addressable by an index path starting at the root.
"""

import logging
from typing import Iterable, List

from vcd.reader import Token, TokenKind

from .data_model import Scope, ScopeItem, ScopeTree, Variable, ROOT_SCOPE_KIND

logger = logging.getLogger(__name__)


class _OpenScope:
    """A scope whose $upscope has not been seen yet."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        self.children: List[ScopeItem] = []

    def freeze(self) -> Scope:
        return Scope(self.kind, self.name, tuple(self.children))


def kind_name(kind: object) -> str:
    """Plain string for a pyvcd ScopeType/VarType enum member."""
    return str(getattr(kind, "value", kind))


def reference_name(decl: object) -> str:
    """Variable name with its bit-select, e.g. "data[0]" or "a[3:0]".

    pyvcd splits "$var wire 1 ! data [0] $end" into reference "data" and
    bit_index 0 (or an (msb, lsb) pair for ranges). Bit-blasted nets only stay
    distinct siblings when the bit-select is kept in the name.
    """
    bit_index = getattr(decl, "bit_index", None)
    if bit_index is None:
        return decl.reference
    if isinstance(bit_index, tuple):
        return f"{decl.reference}[{bit_index[0]}:{bit_index[1]}]"
    return f"{decl.reference}[{bit_index}]"


def _close_innermost(stack: List[_OpenScope]) -> None:
    scope = stack.pop()
    stack[-1].children.append(scope.freeze())


def build_scope_tree(tokens: Iterable[Token]) -> ScopeTree:
    """Build the scope hierarchy from header tokens.

    Stops at $enddefinitions. Tokens that carry no hierarchy (comments, date,
    version, timescale) are skipped, as are unbalanced $upscope commands.
    Scopes still open when the header ends are closed implicitly.

    Args:
        tokens: pyvcd tokens, typically from vcd.reader.tokenize()

    Returns:
        ScopeTree whose root is a synthetic scope of kind "root"
    """
    stack: List[_OpenScope] = [_OpenScope(ROOT_SCOPE_KIND, "")]

    for token in tokens:
        kind = token.kind
        if kind is TokenKind.SCOPE:
            decl = token.data
            stack.append(_OpenScope(kind_name(decl.type_), decl.ident))
        elif kind is TokenKind.UPSCOPE:
            if len(stack) > 1:
                _close_innermost(stack)
            else:
                logger.debug("Skipping $upscope without matching $scope")
        elif kind is TokenKind.VAR:
            decl = token.data
            stack[-1].children.append(Variable(
                kind=kind_name(decl.type_),
                width=int(decl.size),
                identifier=decl.id_code,
                name=reference_name(decl),
            ))
        elif kind is TokenKind.ENDDEFINITIONS:
            break

    if len(stack) > 1:
        logger.debug(f"Closing {len(stack) - 1} unterminated scope(s) at end of header")
    while len(stack) > 1:
        _close_innermost(stack)

    return ScopeTree(stack[0].freeze())
