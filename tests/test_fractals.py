import math

import pytest

from frakt.complex import Complex
from frakt.fractals import (
    BurningShipDescriptor,
    FractalOperations,
    IteratedSinZDescriptor,
    JuliaDescriptor,
    MandelbrotDescriptor,
    NewtonRaphsonZ3Descriptor,
    NewtonRaphsonZ4Descriptor,
    fractal_from_dict,
    fractal_to_dict,
    newton_raphson_step,
)
from frakt.models import PixelIntensity


def test_iterated_sinz_max_iteration_returns_50():
    descriptor = IteratedSinZDescriptor(Complex(4.5, -65.7))
    assert descriptor.max_iteration() == 50


def test_iterated_sinz_eta_is_50():
    assert IteratedSinZDescriptor(Complex(0.2, 1.0)).eta() == 50.0


def test_iterated_sinz_outside_threshold_does_not_iterate():
    descriptor = IteratedSinZDescriptor(Complex(0.2, 1.0))
    result = descriptor.compute_pixel_intensity(Complex(10.0, 0.0), 64)
    assert result == PixelIntensity(2.0, 0.0)


def test_iterated_sinz_count_within_bounds():
    descriptor = IteratedSinZDescriptor(Complex(0.2, 1.0))
    result = descriptor.compute_pixel_intensity(Complex(0.5, 0.5), 64)
    assert 0.0 <= result.count <= 1.0


def test_julia_zero_threshold_returns_norm_of_point():
    descriptor = JuliaDescriptor(Complex(-0.8, 0.156), 0.0)
    result = descriptor.compute_pixel_intensity(Complex(3.0, 4.0), 100)
    assert result == PixelIntensity(5.0, 0.0)


def test_julia_point_at_zero_with_zero_c_never_escapes():
    descriptor = JuliaDescriptor(Complex(0.0, 0.0), 4.0)
    result = descriptor.compute_pixel_intensity(Complex(0.0, 0.0), 100)
    assert result == PixelIntensity(0.0, 1.0)


def test_mandelbrot_origin_stays_bounded():
    result = MandelbrotDescriptor().compute_pixel_intensity(Complex(0.0, 0.0), 100)
    assert result.count == 1.0
    assert result.zn == 0.0


def test_mandelbrot_far_point_escapes_after_one_iteration():
    result = MandelbrotDescriptor().compute_pixel_intensity(Complex(3.0, 0.0), 10)
    assert result.zn == 2.25
    assert result.count == pytest.approx(0.1, rel=1e-6)


def test_mandelbrot_zero_max_iteration_gives_nan_count():
    result = MandelbrotDescriptor().compute_pixel_intensity(Complex(0.0, 0.0), 0)
    assert math.isnan(result.count) is True
    assert result.zn == 0.0


def test_burning_ship_origin_stays_bounded():
    descriptor = BurningShipDescriptor(Complex(0.0, 0.0), 4.0)
    result = descriptor.compute_pixel_intensity(Complex(0.0, 0.0), 255)
    assert result == PixelIntensity(0.0, 1.0)


def test_burning_ship_zero_threshold_does_not_iterate():
    descriptor = BurningShipDescriptor(Complex(5.0, 5.0), 0.0)
    result = descriptor.compute_pixel_intensity(Complex(1.0, 1.0), 255)
    assert result == PixelIntensity(0.0, 0.0)


def test_newton_z3_at_root_converges_immediately():
    result = NewtonRaphsonZ3Descriptor().compute_pixel_intensity(Complex(1.0, 0.0), 50)
    assert result == PixelIntensity(0.5, 0.0)


def test_newton_z4_at_imaginary_root():
    result = NewtonRaphsonZ4Descriptor().compute_pixel_intensity(Complex(0.0, 1.0), 50)
    assert result.count == 0.0
    assert result.zn == pytest.approx(0.75, rel=1e-6)


def test_newton_z3_at_origin_is_nan_and_exhausts_iterations():
    result = NewtonRaphsonZ3Descriptor().compute_pixel_intensity(Complex(0.0, 0.0), 10)
    assert math.isnan(result.zn)
    assert result.count == 1.0


def test_newton_step_at_root_is_fixed_point():
    assert newton_raphson_step(Complex(1.0, 0.0), 3) == Complex(1.0, 0.0)


@pytest.mark.parametrize("degree", [3, 4])
def test_newton_step_converges_to_real_root(degree):
    z = Complex(2.0, 0.0)
    for _ in range(50):
        z = newton_raphson_step(z, degree)
    assert z.re == pytest.approx(1.0)
    assert z.im == pytest.approx(0.0)


@pytest.mark.parametrize("degree", [0, 2, 5])
def test_newton_step_rejects_other_degrees(degree):
    with pytest.raises(ValueError, match="Degree must be 3 or 4"):
        newton_raphson_step(Complex(1.0, 1.0), degree)


def test_fractal_operations_is_abstract():
    with pytest.raises(TypeError):
        FractalOperations()


def test_iterated_sinz_to_dict():
    descriptor = IteratedSinZDescriptor(Complex(0.2, 1.0))
    assert fractal_to_dict(descriptor) == {"IteratedSinZ": {"c": {"re": 0.2, "im": 1.0}}}


def test_julia_to_dict():
    descriptor = JuliaDescriptor(Complex(-0.8, 0.156), 4.0)
    assert fractal_to_dict(descriptor) == {
        "Julia": {"c": {"re": -0.8, "im": 0.156}, "divergence_threshold_square": 4.0}
    }


def test_mandelbrot_to_dict():
    assert fractal_to_dict(MandelbrotDescriptor()) == {"Mandelbrot": {}}


@pytest.mark.parametrize(
    "descriptor",
    [
        JuliaDescriptor(Complex(-0.8, 0.156), 4.0),
        IteratedSinZDescriptor(Complex(0.2, 1.0)),
        MandelbrotDescriptor(),
        NewtonRaphsonZ3Descriptor(),
        NewtonRaphsonZ4Descriptor(),
        BurningShipDescriptor(Complex(0.0, 0.0), 4.0),
    ],
)
def test_round_trip(descriptor):
    assert fractal_from_dict(fractal_to_dict(descriptor)) == descriptor


def test_from_dict_accepts_integer_numbers():
    result = fractal_from_dict({"BurningShip": {"c": {"re": 0, "im": 0}, "divergence_threshold_square": 4}})
    assert result == BurningShipDescriptor(Complex(0.0, 0.0), 4.0)


def test_from_dict_unknown_variant():
    with pytest.raises(ValueError):
        fractal_from_dict({"Sierpinski": {}})


def test_from_dict_missing_field():
    with pytest.raises(ValueError):
        fractal_from_dict({"Julia": {"c": {"re": 0.0, "im": 0.0}}})


def test_from_dict_not_a_mapping():
    with pytest.raises(ValueError):
        fractal_from_dict(["Mandelbrot"])


def test_to_dict_rejects_foreign_descriptor():
    class Custom(FractalOperations):
        def compute_pixel_intensity(self, complex_point, max_iteration):
            return PixelIntensity(0.0, 0.0)

    with pytest.raises(ValueError):
        fractal_to_dict(Custom())