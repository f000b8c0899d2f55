from . import alog
from . import dec_normalize as dn


def _bits(v, pos, n):
  return (v >> pos) & ((1 << n) - 1)


def pack_fields(fmt, s, e, m):
  nx, nm = fmt.exponent_bits, fmt.mantissa_bits

  return (s << (nx + nm)) | (_bits(e, 0, nx) << nm) | _bits(m, 0, nm)


def unpack_fields(fmt, code):
  nx, nm = fmt.exponent_bits, fmt.mantissa_bits

  return _bits(code, nx + nm, 1), _bits(code, nm, nx), _bits(code, 0, nm)


def bits_to_code(bits):
  return int(bits, 2)


def code_to_bits(fmt, code):
  if code < 0 or code >> fmt.total_bits:
    alog.xraise(dn.InvalidInput, f'Code {code} does not fit {fmt.total_bits} bits')

  return format(code, f'0{fmt.total_bits}b')


def split_fields(fmt, bits):
  # Bit string to (sign, exponent, mantissa) integer fields.
  return unpack_fields(fmt, bits_to_code(bits))


def join_fields(sign_bits, exp_bits, mant_bits):
  return sign_bits + exp_bits + mant_bits
