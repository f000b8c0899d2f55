"""Encoding of real values into minifloat bit strings, and back.

The encoder works on the exact decimal digits of its input (see
dec_normalize), converts them to binary, and lays out sign, biased exponent
and mantissa fields of a FormatDescriptor. Rounding, when requested, adds
the first discarded binary digit to the retained mantissa (round half up on
the magnitude), which is not the IEEE round to nearest even.
"""

import collections
import math

from . import alog
from . import assert_checks as tas
from . import bin_utils as bu
from . import dec_normalize as dn
from . import env_config as ecfg
from . import fp_format as fpf
from . import fp_utils as fpu


class CodecConfig(ecfg.EnvConfig):
  MINIFLOAT_FORMAT = 'fp8_e4m3'
  MINIFLOAT_ROUNDING = True


DecodeResult = collections.namedtuple('DecodeResult', 'value, error', defaults=(None,))


def _inf_bits(fmt, sign_bit):
  return fpu.join_fields(sign_bit, '1' * fmt.exponent_bits, '0' * fmt.mantissa_bits)


def _zero_bits(fmt, sign_bit):
  return fpu.join_fields(sign_bit, '0' * fmt.exponent_bits, '0' * fmt.mantissa_bits)


def _nan_bits(fmt):
  if fmt.mantissa_bits == 0:
    alog.xraise(dn.InvalidInput, f'Format {fmt.name} has no NaN encoding')

  return fpu.join_fields('0', '1' * fmt.exponent_bits,
                         bu.zfill_right('1', fmt.mantissa_bits))


def _offset_exponent(int_bits, frac_bits):
  # Power of two of the most significant set bit, None when there is none.
  norm_int = int_bits.lstrip('0')
  if norm_int:
    return len(norm_int) - 1
  if '1' in frac_bits:
    return -(frac_bits.index('1') + 1)


def encode(fmt, value, rounding=True):
  parts = dn.normalize(value)
  sign_bit = '1' if parts.negative else '0'

  if parts.special == 'inf':
    return _inf_bits(fmt, sign_bit)
  if parts.special == 'nan':
    return _nan_bits(fmt)

  # Checked before the binary conversion, which is linear in the digit count.
  if dn.magnitude(parts) > fmt.max_value:
    alog.debug0(f'Value {value} exceeds the {fmt.name} range, saturating to infinity')

    return _inf_bits(fmt, sign_bit)

  int_bits = bu.int_to_bits(dn.digits_to_int(parts.int_digits))
  frac_bits = bu.decimal_frac_to_bits(parts.frac_digits, fmt.fraction_bits_limit)

  offset = _offset_exponent(int_bits, frac_bits)
  if offset is None:
    if not dn.is_zero(parts):
      alog.debug0(f'Value {value} underflows the {fmt.fraction_bits_limit} fractional ' \
                  f'bits of {fmt.name}, encoding as zero')

    return _zero_bits(fmt, sign_bit)

  norm_data = (int_bits + frac_bits).lstrip('0')
  exp = offset + fmt.bias

  if exp < 0:
    exp_bits = '0' * fmt.exponent_bits
    sub_exp = 1 - fmt.bias
    data = '0' * max(0, sub_exp - offset - 1) + norm_data
    start = 0
  else:
    exp_bits = bu.zfill_left(bu.int_to_bits(exp), fmt.exponent_bits)
    if len(exp_bits) > fmt.exponent_bits or exp == fmt.max_exponent:
      return _inf_bits(fmt, sign_bit)

    data = norm_data
    # Biased exponent zero keeps the leading bit, it is the top subnormal binade.
    start = 1 if exp > 0 else 0

  if alog.level_active(alog.SPAM):
    alog.spam(f'Encoding {value} as {fmt.name}: int={int_bits} frac={frac_bits} ' \
              f'offset={offset} exp={exp} data={data}[{start}:]')

  end = start + fmt.mantissa_bits
  mant_bits = bu.zfill_right(data[start: end], fmt.mantissa_bits)
  if rounding and len(data) > end and data[end] == '1':
    mant_bits, carry = bu.increment_bits(mant_bits)
    if carry:
      exp = max(exp, 0) + 1
      if exp >= fmt.max_exponent:
        alog.debug0(f'Rounding {value} overflows the {fmt.name} range')

        return _inf_bits(fmt, sign_bit)

      exp_bits = bu.zfill_left(bu.int_to_bits(exp), fmt.exponent_bits)

    alog.verbose(f'Rounded {value} mantissa up to {mant_bits} (exponent {exp_bits})')

  result = fpu.join_fields(sign_bit, exp_bits, mant_bits)
  tas.check_eq(len(result), fmt.total_bits, msg=f'Bad encoding of {value}: {result}')

  return result


def _as_bit_string(fmt, bits):
  if isinstance(bits, int) and not isinstance(bits, bool):
    if bits < 0 or bits >> fmt.total_bits:
      return None, f'Code {bits} does not fit {fmt.total_bits} bits'

    return fpu.code_to_bits(fmt, bits), None
  if not isinstance(bits, str):
    return None, f'Unsupported encoded value: {bits!r}'
  if len(bits) != fmt.total_bits:
    return None, f'Expected {fmt.total_bits} bits, got {len(bits)}: {bits!r}'
  if bits.strip('01'):
    return None, f'Not a binary string: {bits!r}'

  return bits, None


def decode_exact(fmt, bits):
  """Decodes a well formed bit string of fmt.

  Finite values are returned as exact fractions.Fraction, specials as the
  float inf, -inf or nan.
  """
  s, e, m = fpu.split_fields(fmt, bits)
  sign = -1 if s else 1
  mant_bits = bits[1 + fmt.exponent_bits:]

  if e > 2 * fmt.bias:
    if e == 2 * fmt.bias + 1 and m == 0:
      return sign * math.inf

    return math.nan

  mvalue = bu.frac_bits_value(mant_bits)
  if e == 0:
    return sign * mvalue * fpf.pow2(1 - fmt.bias)

  return sign * (1 + mvalue) * fpf.pow2(e - fmt.bias)


def try_decode(fmt, bits):
  xbits, error = _as_bit_string(fmt, bits)
  if error is not None:
    alog.debug(f'Cannot decode as {fmt.name}: {error}')

    return DecodeResult(math.nan, error)

  value = decode_exact(fmt, xbits)
  if isinstance(value, float):
    return DecodeResult(value)

  sign = -1.0 if xbits[0] == '1' else 1.0
  try:
    # The copysign() keeps the sign of zero patterns.
    return DecodeResult(math.copysign(float(abs(value)), sign))
  except OverflowError:
    alog.warning(f'Decoded {fmt.name} value {xbits} exceeds the host float range')

    return DecodeResult(math.copysign(math.inf, sign))


def decode(fmt, bits):
  # Malformed input and genuine NaN patterns both decode to NaN here, use
  # try_decode() to tell them apart.
  return try_decode(fmt, bits).value
