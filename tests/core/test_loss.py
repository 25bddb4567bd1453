"""Loss function properties: non-negativity, exact fit, finite-difference checks."""

import pytest

from gdviz.core.loss import InvalidDataset, grad_b, grad_w, gradients, mse


def test_mse_zero_on_exact_fit(line_dataset):
    assert mse(-0.8, 10.0, line_dataset) == pytest.approx(0.0, abs=1e-12)


def test_mse_positive_off_the_line(line_dataset):
    assert mse(0.0, 0.0, line_dataset) > 0.0
    assert mse(-0.8, 10.01, line_dataset) > 0.0


def test_mse_known_value(line_dataset):
    # residuals at (0, 0) are -10, -6, -2
    assert mse(0.0, 0.0, line_dataset) == pytest.approx((100 + 36 + 4) / 3)


def test_gradients_known_values(line_dataset):
    # (2/3) * (-10*0 + -6*5 + -2*10) and (2/3) * (-18)
    assert grad_w(0.0, 0.0, line_dataset) == pytest.approx(2 / 3 * -50)
    assert grad_b(0.0, 0.0, line_dataset) == pytest.approx(2 / 3 * -18)


@pytest.mark.parametrize("w,b", [(0.0, 0.0), (1.5, -2.0), (-0.8, 10.0), (-2.7, 4.4)])
def test_finite_difference_gradient_check(noisy_dataset, w, b):
    h = 1e-5
    num_w = (mse(w + h, b, noisy_dataset) - mse(w - h, b, noisy_dataset)) / (2 * h)
    num_b = (mse(w, b + h, noisy_dataset) - mse(w, b - h, noisy_dataset)) / (2 * h)

    assert grad_w(w, b, noisy_dataset) == pytest.approx(num_w, rel=1e-5, abs=1e-6)
    assert grad_b(w, b, noisy_dataset) == pytest.approx(num_b, rel=1e-5, abs=1e-6)


def test_combined_gradients_match_individual(noisy_dataset):
    dw, db = gradients(0.3, 1.7, noisy_dataset)

    assert dw == pytest.approx(grad_w(0.3, 1.7, noisy_dataset))
    assert db == pytest.approx(grad_b(0.3, 1.7, noisy_dataset))


def test_accepts_plain_pairs():
    assert mse(1.0, 0.0, [(1.0, 1.0), (2.0, 2.0)]) == 0.0


@pytest.mark.parametrize("fn", [mse, grad_w, grad_b, gradients])
def test_empty_data_raises(fn):
    with pytest.raises(InvalidDataset):
        fn(0.0, 0.0, [])
