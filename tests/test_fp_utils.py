import pytest

from py_minifloat import dec_normalize as dn
from py_minifloat import fp_format as fpf
from py_minifloat import fp_utils as fpu


E4M3 = fpf.FormatDescriptor(4, 3)


def test_pack_unpack():
  assert fpu.pack_fields(E4M3, 1, 8, 1) == 0b11000001
  assert fpu.unpack_fields(E4M3, 0b11000001) == (1, 8, 1)
  assert fpu.pack_fields(E4M3, 0, 15, 0) == 0b01111000


def test_split_fields():
  assert fpu.split_fields(E4M3, '11000001') == (1, 8, 1)
  assert fpu.split_fields(fpf.FORMATS['fp16'], '0111101111111111') == (0, 30, 1023)


def test_codes():
  assert fpu.bits_to_code('0101') == 5
  assert fpu.code_to_bits(E4M3, 193) == '11000001'
  assert fpu.code_to_bits(E4M3, 0) == '00000000'

  with pytest.raises(dn.InvalidInput):
    fpu.code_to_bits(E4M3, 256)
  with pytest.raises(dn.InvalidInput):
    fpu.code_to_bits(E4M3, -1)
