import fractions

import pytest

from py_minifloat import fp_format as fpf


def test_derived_constants():
  fmt = fpf.create_descriptor(4, 3)

  assert fmt.total_bits == 8
  assert fmt.bias == 7
  assert fmt.max_finite_magnitude == 127
  assert fmt.max_exponent == 15
  assert fmt.max_value == 240
  assert fmt.min_normal == fractions.Fraction(1, 64)
  assert fmt.min_subnormal == fractions.Fraction(1, 512)
  assert fmt.fraction_bits_limit == 9
  assert fmt.name == 'e4m3'


def test_half_and_bfloat():
  half = fpf.FORMATS['fp16']
  assert half.bias == 15
  assert half.max_value == 65504
  assert half.min_subnormal == 2**-24

  bf16 = fpf.FORMATS['bf16']
  assert float(bf16.max_value) == 3.3895313892515355e38


def test_single_exponent_bit():
  fmt = fpf.FormatDescriptor(1, 2)

  assert fmt.bias == 0
  assert fmt.max_value == 1.5
  assert fmt.min_subnormal == 0.5


@pytest.mark.parametrize('nx, nm', [
  (0, 3),
  (-1, 3),
  (4, -1),
  (4.0, 3),
  (True, 3),
  ('4', 3),
])
def test_invalid_layout(nx, nm):
  with pytest.raises(fpf.InvalidLayout):
    fpf.create_descriptor(nx, nm)


def test_invalid_layout_is_value_error():
  with pytest.raises(ValueError):
    fpf.FormatDescriptor(0, 0)


def test_immutable_and_hashable():
  fmt = fpf.FormatDescriptor(5, 2)

  with pytest.raises(AttributeError):
    fmt.exponent_bits = 3

  cache = {fmt: 'e5m2'}
  assert cache[fpf.FormatDescriptor(5, 2)] == 'e5m2'
  assert fmt == fpf.FORMATS['fp8_e5m2']


def test_get_format():
  assert fpf.get_format('fp16') == (5, 10)
  assert fpf.get_format('FP8_E4M3') == (4, 3)
  assert fpf.get_format('e3m4') == fpf.FormatDescriptor(3, 4)
  assert fpf.get_format('E2M0') == fpf.FormatDescriptor(2, 0)

  fmt = fpf.FormatDescriptor(6, 9)
  assert fpf.get_format(fmt) is fmt

  with pytest.raises(fpf.InvalidLayout):
    fpf.get_format('fp7')
  with pytest.raises(fpf.InvalidLayout):
    fpf.get_format('e0m3')
