"""Tests for building the scope hierarchy from VCD header tokens."""

from wavespy.data_model import Scope, Variable, ValueKind
from wavespy.scope_tree import build_scope_tree
from wavespy.trace_reader import read_header
from .test_utils import tokens_from_text, vcd_text


def test_alu_hierarchy(alu_vcd):
    tree = read_header(alu_vcd).tree

    assert tree.root.kind == "root"
    assert tree.root.name == ""
    assert [s.name for s in tree.root.scopes()] == ["instance", "tb"]

    instance = tree.root.child_scope("instance")
    assert instance.kind == "module"
    assert [v.name for v in instance.variables()] == ["clk", "cin", "a[3:0]", "b[3:0]", "sum[4:0]", "cout"]
    assert [s.name for s in instance.scopes()] == ["alu_ctrl"]

    gain = instance.child_scope("alu_ctrl").child_variable("gain")
    assert gain == Variable(kind="real", width=64, identifier="'", name="gain")
    assert gain.value_kind == ValueKind.TEXT


def test_variable_widths_and_kinds(alu_vcd):
    tree = read_header(alu_vcd).tree
    variables = {".".join(path): var for path, var in tree.walk()}

    assert variables["instance.a[3:0]"].width == 4
    assert variables["instance.a[3:0]"].value_kind == ValueKind.VECTOR
    assert variables["instance.sum[4:0]"].width == 5
    assert variables["instance.cin"].value_kind == ValueKind.SCALAR


def test_walk_is_declaration_order(alu_vcd):
    tree = read_header(alu_vcd).tree
    paths = [".".join(path) for path, _ in tree.walk()]

    assert paths == [
        "instance.clk", "instance.cin", "instance.a[3:0]", "instance.b[3:0]", "instance.sum[4:0]",
        "instance.cout", "instance.alu_ctrl.gain", "tb.clk",
    ]
    assert len(tree) == 8


def test_aliases_share_identifier(alu_vcd):
    tree = read_header(alu_vcd).tree

    aliases = [".".join(path) for path, _ in tree.variables_for("!")]
    assert aliases == ["instance.clk", "tb.clk"]
    # Unique codes only, in first-declaration order
    assert tree.identifiers() == ["!", '"', "#", "$", "%", "&", "'"]


def test_unscoped_variables_attach_to_root():
    tokens = tokens_from_text(vcd_text("""
        $var wire 1 ! rst $end
        $scope module top $end
        $var wire 1 " clk $end
        $upscope $end
    """))
    tree = build_scope_tree(tokens)

    assert tree.root.children[0] == Variable("wire", 1, "!", "rst")
    assert isinstance(tree.root.children[1], Scope)
    assert [path for path, _ in tree.walk()] == [("rst",), ("top", "clk")]


def test_unbalanced_upscope_is_ignored():
    tokens = tokens_from_text(vcd_text("""
        $scope module top $end
        $var wire 1 ! clk $end
        $upscope $end
        $upscope $end
        $var wire 1 " rst $end
    """))
    tree = build_scope_tree(tokens)

    assert [path for path, _ in tree.walk()] == [("top", "clk"), ("rst",)]


def test_unclosed_scopes_are_closed_at_end_of_header():
    tokens = tokens_from_text(vcd_text("""
        $scope module top $end
        $scope module sub $end
        $var wire 1 ! q $end
    """))
    tree = build_scope_tree(tokens)

    assert [path for path, _ in tree.walk()] == [("top", "sub", "q")]


def test_building_stops_at_enddefinitions():
    tokens = tokens_from_text(vcd_text(
        "$scope module top $end\n$var wire 1 ! clk $end\n$upscope $end",
        "#0\n0!\n#5\n1!",
    ))
    tree = build_scope_tree(tokens)

    assert len(tree) == 1


def test_empty_header_yields_bare_root():
    tree = build_scope_tree(tokens_from_text(vcd_text("")))

    assert tree.root.children == ()
    assert len(tree) == 0
    assert tree.identifiers() == []


def test_bit_selects_are_part_of_the_name():
    tokens = tokens_from_text(vcd_text("""
        $scope module top $end
        $var wire 1 ! data [0] $end
        $var wire 1 " data [1] $end
        $var wire 8 # bus [7:0] $end
        $upscope $end
    """))
    top = build_scope_tree(tokens).root.child_scope("top")

    assert [v.name for v in top.variables()] == ["data[0]", "data[1]", "bus[7:0]"]
    assert [v.reference for v in top.variables()] == ["data", "data", "bus"]


def test_child_variable_by_reference():
    tokens = tokens_from_text(vcd_text("""
        $scope module top $end
        $var wire 1 ! data [0] $end
        $var wire 1 " data [1] $end
        $var wire 8 # bus [7:0] $end
        $upscope $end
    """))
    top = build_scope_tree(tokens).root.child_scope("top")

    assert top.child_variable("bus").identifier == "#"
    assert top.child_variable("data[1]").identifier == '"'
    # Bit-blasted siblings share a reference, so it names neither of them
    assert top.child_variable("data") is None
