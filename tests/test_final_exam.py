import pytest

from compfin import final_exam


def test_question1_bounds_and_determinism():
    value = final_exam.question1(2000, 7)
    assert 0.0 <= value <= 2.54
    assert final_exam.question1(2000, 7) == value


def test_question1_rejects_empty():
    with pytest.raises(ValueError):
        final_exam.question1(0, 1)


def test_heston_asian_zero_rate_and_volatility():
    assert final_exam.heston_asian(0.0, 0.0, 0.0, 0.0, 20.0, 0.0, 0.5, 1.0, 10, 100) == 0.0


def test_heston_asian_positive_and_repeatable():
    args = (0.06, 0.45, -5.105, 0.25, 20.0, 0.05, -0.75, 2.0, 50, 500)
    price = final_exam.heston_asian(*args)
    assert price > 0.0
    assert final_exam.heston_asian(*args) == price


def test_heston_asian_invalid_inputs():
    with pytest.raises(ValueError):
        final_exam.heston_asian(0.06, 0.45, -5.1, 0.25, 20.0, 0.05, 1.5, 2.0, 10, 10)
    with pytest.raises(ValueError):
        final_exam.heston_asian(0.06, 0.45, -5.1, 0.25, 20.0, 0.05, 0.0, 2.0, 0, 10)


def test_question2_three_positive_prices():
    prices = final_exam.question2()
    assert len(prices) == 3
    assert all(p > 0.0 for p in prices)


def test_barrier_question_ranges():
    result = final_exam.barrier_question()
    assert result.price >= 0.0
    assert 0.0 <= result.lower_probability <= 1.0


def test_bond_put_question_nonnegative_and_repeatable():
    value = final_exam.bond_put_question()
    assert 0.0 <= value < 9800.0
    assert final_exam.bond_put_question() == value


def test_jump_quanto_question_positive():
    value = final_exam.jump_quanto_question()
    assert value > 0.0
    assert final_exam.jump_quanto_question() == value


def test_main_prints_every_question(capsys):
    assert final_exam.main([]) == 0
    out = capsys.readouterr().out
    assert "Running Qn 1" in out
    assert "conditional probability:" in out
    assert "Pay off is:" in out