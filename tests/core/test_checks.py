"""Tests for assertions, preconditions and Bool-only contracts."""

import pytest

from fundamentals.checks import (
    assert_,
    assertion_failure,
    precondition,
    precondition_failure,
    require_bool,
)
from fundamentals.config import DEFAULT_FATAL_EXIT_CODE, set_config
from fundamentals.errors import ContractViolationError


class TestRequireBool:
    """Only real Bool values satisfy a Bool contract."""

    @pytest.mark.parametrize("value", [True, False])
    def test_accepts_bool(self, value):
        assert require_bool(value) is value

    @pytest.mark.parametrize("value", [1, 0, "", "yes", None, [], 1.0])
    def test_rejects_truthy_stand_ins(self, value):
        with pytest.raises(ContractViolationError) as exc_info:
            require_bool(value)
        assert exc_info.value.code == "FND001"

    def test_comparison_result_is_accepted(self):
        z = 1
        assert require_bool(z == 1) is True

    def test_message_names_the_context(self):
        with pytest.raises(ContractViolationError, match="if condition must be a Bool"):
            require_bool(1, "if condition")


class TestPassingChecks:
    """Passing checks return normally in every build mode."""

    @pytest.mark.parametrize("mode", ["debug", "release", "unchecked"])
    def test_true_conditions(self, mode):
        set_config(build_mode=mode)
        age = 3
        assert_(age >= 0, "A person's age can't be less than zero.")
        precondition(lambda: age >= 0)

    def test_disabled_assertion_is_not_evaluated(self):
        set_config(build_mode="release")
        calls = []

        def condition():
            calls.append("evaluated")
            return False

        assert_(condition, "never checked")
        assert calls == []

    def test_unchecked_precondition_is_not_evaluated(self):
        set_config(build_mode="unchecked")
        calls = []

        def condition():
            calls.append("evaluated")
            return False

        precondition(condition)
        assert calls == []

    def test_failures_are_ignored_when_disabled(self):
        set_config(build_mode="unchecked")
        assertion_failure("ignored")
        precondition_failure("ignored")

    def test_non_bool_condition_is_a_contract_violation(self):
        with pytest.raises(ContractViolationError):
            precondition(1)


@pytest.mark.fatal
class TestFailingChecks:
    """Failing checks halt the process when they are enabled."""

    def test_assertion_fails_in_debug(self, run_child):
        completed = run_child(
            """
            from fundamentals import assert_
            age = -3
            assert_(age >= 0, "A person's age can't be less than zero.")
            print("unreachable")
            """
        )

        assert completed.returncode == DEFAULT_FATAL_EXIT_CODE
        assert "Assertion failed: A person's age can't be less than zero." in completed.stderr
        assert "line 4" in completed.stderr

    def test_assertion_skipped_in_release(self, run_child):
        completed = run_child(
            """
            from fundamentals import assert_
            age = -3
            assert_(age >= 0)
            print("continued")
            """,
            env={"FUNDAMENTALS_BUILD_MODE": "release"},
        )

        assert completed.returncode == 0
        assert completed.stdout.strip() == "continued"

    def test_assertion_failure_in_else_branch(self, run_child):
        completed = run_child(
            """
            from fundamentals import assertion_failure
            age = -3
            if age > 10:
                print("You can ride the roller-coaster or the ferris wheel.")
            elif age >= 0:
                print("You can ride the ferris wheel.")
            else:
                assertion_failure("A person's age can't be less than zero.")
            """
        )

        assert completed.returncode == DEFAULT_FATAL_EXIT_CODE
        assert "Assertion failed" in completed.stderr

    def test_precondition_fails_in_release(self, run_child):
        completed = run_child(
            """
            from fundamentals import precondition
            index = 0
            precondition(index > 0, "Index must be greater than zero.")
            """,
            env={"FUNDAMENTALS_BUILD_MODE": "release"},
        )

        assert completed.returncode == DEFAULT_FATAL_EXIT_CODE
        assert "Precondition failed: Index must be greater than zero." in completed.stderr

    def test_precondition_skipped_in_unchecked(self, run_child):
        completed = run_child(
            """
            from fundamentals import precondition
            precondition(False, "ignored")
            print("continued")
            """,
            env={"FUNDAMENTALS_BUILD_MODE": "unchecked"},
        )

        assert completed.returncode == 0

    def test_precondition_failure(self, run_child):
        completed = run_child(
            """
            from fundamentals import precondition_failure
            precondition_failure("unhandled case")
            """
        )

        assert completed.returncode == DEFAULT_FATAL_EXIT_CODE
        assert "Precondition failed: unhandled case" in completed.stderr


def test_check_condition_alias_is_distinct_from_bind_clause():
    from fundamentals import binding, checks

    assert "CheckCondition" in checks.__all__
    assert "Condition" not in checks.__all__
    assert isinstance(binding.when(lambda: True), binding.Condition)
