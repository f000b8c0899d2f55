import fractions

import pytest

from py_minifloat import bin_utils as bu
from py_minifloat import dec_normalize as dn


@pytest.mark.parametrize('n, bits', [
  (0, '0'),
  (1, '1'),
  (2, '10'),
  (13, '1101'),
  (255, '11111111'),
  (2**70, '1' + '0' * 70),
])
def test_int_to_bits(n, bits):
  assert bu.int_to_bits(n) == bits


def test_int_to_bits_negative():
  with pytest.raises(dn.InvalidInput):
    bu.int_to_bits(-3)


def test_frac_to_bits():
  assert bu.frac_to_bits(1, 4, 10) == '01'
  assert bu.frac_to_bits(0, 5, 10) == ''
  # 0.1 has no finite binary expansion, the limit truncates it.
  assert bu.frac_to_bits(1, 10, 8) == '00011001'
  assert len(bu.frac_to_bits(1, 3, 17)) == 17


def test_frac_to_bits_range():
  with pytest.raises(dn.InvalidInput):
    bu.frac_to_bits(3, 3, 10)
  with pytest.raises(dn.InvalidInput):
    bu.frac_to_bits(-1, 3, 10)


def test_decimal_frac_to_bits():
  assert bu.decimal_frac_to_bits('25', 9) == '01'
  assert bu.decimal_frac_to_bits('001953125', 9) == '000000001'
  assert bu.decimal_frac_to_bits('', 9) == ''


def test_frac_bits_value():
  assert bu.frac_bits_value('101') == fractions.Fraction(5, 8)
  assert bu.frac_bits_value('0001') == fractions.Fraction(1, 16)
  assert bu.frac_bits_value('') == 0


@pytest.mark.parametrize('bits, result, carry', [
  ('011', '100', 0),
  ('000', '001', 0),
  ('0', '1', 0),
  ('101', '110', 0),
  ('111', '000', 1),
  ('', '', 1),
])
def test_increment_bits(bits, result, carry):
  assert bu.increment_bits(bits) == (result, carry)


def test_zfill():
  assert bu.zfill_left('1', 4) == '0001'
  assert bu.zfill_left('10101', 4) == '10101'
  assert bu.zfill_right('1', 4) == '1000'
  assert bu.zfill_right('', 0) == ''
