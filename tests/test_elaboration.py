import pytest

from psil.elaboration.elaborator import elaborate_decl, elaborate_expr, elaborate_program, elaborate_type
from psil.errors import PsilElaborationError
from psil.reader.parser import read, read_all
from psil.types.lexp import Lapp, Ldec, Ldef, Lfun, Lhastype, Llet, Lnum, Lvar
from psil.types.ltype import Arrow, Int, arrows


def lexp_of(source):
    return elaborate_expr(read(source))


def ltype_of(source):
    return elaborate_type(read(source))


def add(a, b):
    return Lapp(Lapp(Lvar("+"), a), b)


# -----------------------------------------------------
# Types
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("Int", Int),
        ("7", Int),
        ("(Int)", Int),
        ("(Int -> Int)", Arrow(Int, Int)),
        ("(Int -> Int -> Int)", arrows(Int, Int, Int)),
        ("(Int -> (Int -> Int))", arrows(Int, Int, Int)),
        ("(Int -> (Int -> (Int -> Int)))", arrows(Int, Int, Int, Int)),
        ("(fun x Int)", Arrow(Int, Int)),
        ("(fun x y Int)", arrows(Int, Int, Int)),
        ("(fun x (Int -> Int))", arrows(Int, Int, Int)),
        ("(: 5 Int)", Int),
        ("(dec x Int)", Int),
        ("(Int Int)", Arrow(Int, Int)),
        ("+", arrows(Int, Int, Int)),
        ("/", arrows(Int, Int, Int)),
        ("if0", arrows(Int, Int, Int, Int)),
    ]
)
def test_elaborate_type(source, expected):
    assert ltype_of(source) == expected


def test_left_nested_binary_arrow_is_recurried():
    # ((Int -> Int) -> Int) is read as Int -> (Int -> Int); only this exact shape
    assert ltype_of("((Int -> Int) -> Int)") == Arrow(Int, Arrow(Int, Int))
    assert ltype_of("((Int -> Int) -> (Int -> Int))") == Arrow(Arrow(Int, Int), Arrow(Int, Int))


@pytest.mark.parametrize("source", ["foo", "()", "(Int -> ())"])
def test_elaborate_type_rejects_unknown_forms(source):
    with pytest.raises(PsilElaborationError) as exc:
        ltype_of(source)
    assert "Unknown Psil type" in str(exc.value)


# -----------------------------------------------------
# Expressions
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("5", Lnum(5)),
        ("-5", Lnum(-5)),
        ("x", Lvar("x")),
        ("(x)", Lvar("x")),
        ("(+ 2 3)", add(Lnum(2), Lnum(3))),
        ("(2 + 3)", add(Lnum(2), Lnum(3))),
        ("(x - 1)", Lapp(Lapp(Lvar("-"), Lvar("x")), Lnum(1))),
        ("(f 1)", Lapp(Lvar("f"), Lnum(1))),
        ("(f 1 2)", Lapp(Lapp(Lvar("f"), Lnum(1)), Lnum(2))),
        ("(if0 0 1 2)", Lapp(Lapp(Lapp(Lvar("if0"), Lnum(0)), Lnum(1)), Lnum(2))),
        ("(5 -> Int)", Lhastype(Lnum(5), Int)),
        ("((fun x x) -> (Int -> Int))", Lhastype(Lfun("x", Lvar("x")), Arrow(Int, Int))),
        ("(: 5 Int)", Lhastype(Lnum(5), Int)),
        ("(let ((x 1)) x)", Llet("x", Lnum(1), Lvar("x"))),
        (
            "(let ((x 1) (y 2)) (+ x y))",
            Llet("x", Lnum(1), Llet("y", Lnum(2), add(Lvar("x"), Lvar("y")))),
        ),
        ("(dec x Int)", Llet("x", Lhastype(Lvar("x"), Int), Lvar("x"))),
        ("(def x 5)", Llet("x", Lnum(5), Lvar("x"))),
        ("(fun x (+ x 1))", Lfun("x", add(Lvar("x"), Lnum(1)))),
        ("(fun x y (+ x y))", Lfun("x", Lfun("y", add(Lvar("x"), Lvar("y"))))),
    ]
)
def test_elaborate_expr(source, expected):
    assert lexp_of(source) == expected


def test_nested_arithmetic():
    expected = Lapp(
        Lapp(Lvar("/"), Lapp(Lapp(Lvar("*"), Lapp(Lapp(Lvar("-"), Lnum(68)), Lnum(32))), Lnum(5))),
        Lnum(9),
    )
    assert lexp_of("(/ (* (- 68 32) 5) 9)") == expected
    assert lexp_of("(((68 - 32) * 5) / 9)") == expected


def test_definition_refers_back_to_its_name():
    assert lexp_of("(def recursive (recursive (f1 37)))") == Llet(
        "recursive",
        Lapp(Lvar("recursive"), Lapp(Lvar("f1"), Lnum(37))),
        Lvar("recursive"),
    )


def test_elaborate_expr_rejects_empty_list():
    with pytest.raises(PsilElaborationError) as exc:
        lexp_of("()")
    assert "()" in str(exc.value)


# -----------------------------------------------------
# Declarations
# -----------------------------------------------------

def test_elaborate_decl():
    assert elaborate_decl(read("(def x 5)")) == Ldef("x", Lnum(5))
    assert elaborate_decl(read("(dec f (Int -> Int))")) == Ldec("f", Arrow(Int, Int))
    assert elaborate_decl(read("(def inc (fun n (n + 1)))")) == Ldef(
        "inc", Lfun("n", add(Lvar("n"), Lnum(1)))
    )


@pytest.mark.parametrize("source", ["5", "(foo 1 2)", "(def 3 4)", "(def x)", "()"])
def test_elaborate_decl_rejects_unknown_forms(source):
    with pytest.raises(PsilElaborationError) as exc:
        elaborate_decl(read(source))
    assert "Unknown Psil declaration" in str(exc.value)


def test_elaborate_program_is_lazy():
    decls = elaborate_program(read_all("(dec x Int) (def x 1) (bogus)"))
    assert next(decls) == Ldec("x", Int)
    assert next(decls) == Ldef("x", Lnum(1))
    with pytest.raises(PsilElaborationError):
        next(decls)
