import logging

import pytest

from psil.elaboration.elaborator import elaborate_program
from psil.errors import PsilMissingDefinition, PsilTypeError, PsilUnknownVariable, PsilRuntimeError
from psil.evaluation.processor import (
    MissingDefinition,
    ProcessingState,
    Result,
    process_decl,
    process_decls,
)
from psil.reader.parser import read_all
from psil.types.lexp import Ldec, Ldef, Lnum
from psil.types.ltype import Arrow, Int
from psil.types.values import Closure

FACT = """
(dec fact (Int -> Int))
(def fact (fun n (if0 n 1 (* n (fact (- n 1))))))
"""


def decls_of(source):
    return list(elaborate_program(read_all(source)))


def run(source, state=None):
    """Process `source`; return the final state and every log entry in order."""
    state = state or ProcessingState.initial()
    logged = []
    for state, entries in process_decls(state, decls_of(source)):
        logged.extend(entries)
    return state, logged


def test_declaration_becomes_pending():
    state = process_decl(ProcessingState.initial(), Ldec("x", Int))
    assert state.pending == ("x", Int)
    assert state.results == ()


def test_declare_then_define():
    state, logged = run("(dec x Int) (def x 5)")
    assert logged == [Result("x", 5, Int)]
    assert state.pending is None
    assert state.venv.lookup("x") == 5
    assert state.tenv.lookup("x") == Int


def test_definition_binds_the_declared_name():
    state, logged = run("(dec x Int) (def y 5)")
    assert logged == [Result("x", 5, Int)]
    assert state.venv.lookup("x") == 5
    with pytest.raises(PsilUnknownVariable):
        state.venv.lookup("y")


def test_consecutive_declarations_record_missing_definition():
    state = process_decl(ProcessingState.initial(), Ldec("x", Int))
    state = process_decl(state, Ldec("y", Int))
    assert state.results == (MissingDefinition("x"),)
    assert state.pending == ("y", Int)


def test_missing_definition_is_logged_before_later_results():
    _, logged = run("(dec x Int) (dec y Int) (def y 2)")
    assert logged == [MissingDefinition("x"), Result("y", 2, Int)]
    assert isinstance(logged[0].error(), PsilMissingDefinition)
    assert "x" in str(logged[0].error())


def test_definition_without_declaration_synthesizes():
    state, logged = run("(def double (fun x (* x 2))) (def y (double 21))")
    first, second = logged
    assert isinstance(first.value, Closure)
    assert first.ltype == Arrow(Int, Int)
    assert second == Result("y", 42, Int)
    assert state.tenv.lookup("double") == Arrow(Int, Int)


def test_declared_type_must_match_exactly():
    with pytest.raises(PsilTypeError) as exc:
        run("(dec f (Int -> Int)) (def f 5)")
    assert "f" in str(exc.value)


def test_undeclared_definition_cannot_refer_to_itself():
    with pytest.raises(PsilUnknownVariable):
        run("(def x x)")


def test_redefinition_refers_to_earlier_binding():
    state, logged = run("(def x 5) (def x (fun n (+ x n))) (def y (x 1))")
    assert logged[0] == Result("x", 5, Int)
    assert isinstance(logged[1].value, Closure)
    assert logged[1].ltype == Arrow(Int, Int)
    assert logged[2] == Result("y", 6, Int)
    assert isinstance(state.venv.lookup("x"), Closure)


def test_declared_definition_cannot_use_itself_eagerly():
    with pytest.raises(PsilRuntimeError):
        run("(dec x Int) (def x (+ x 1))")


def test_recursive_definition_through_declaration():
    state, logged = run(FACT + "(def r (fact 5))")
    assert logged[0].ltype == Arrow(Int, Int)
    assert isinstance(logged[0].value, Closure)
    assert logged[1] == Result("r", 120, Int)
    assert state.pending is None


def test_log_is_flushed_after_each_declaration():
    batches = [
        entries
        for _, entries in process_decls(
            ProcessingState.initial(), [Ldec("a", Int), Ldef("a", Lnum(1)), Ldef("b", Lnum(2))]
        )
    ]
    assert batches == [(), (Result("a", 1, Int),), (Result("b", 2, Int),)]


def test_processing_is_deterministic():
    source = FACT + "(def a (fact 4)) (def b (+ a 1))"
    assert run(source)[1] == run(source)[1]


def test_earlier_states_are_not_changed():
    start = ProcessingState.initial()
    after, _ = run("(def x 1)", start)
    assert "x" in after.venv
    assert "x" not in start.venv


def test_pending_declaration_at_end_is_reported(caplog):
    with caplog.at_level(logging.WARNING, logger="psil.evaluation.processor"):
        state, logged = run("(def a 1) (dec lonely Int)")
    assert logged == [Result("a", 1, Int)]
    assert state.pending == ("lonely", Int)
    assert "lonely" in caplog.text
