import collections
import decimal
import fractions
import re

from . import alog


class InvalidInput(ValueError):
  pass


# The digits are kept exactly as written: int_digits has no redundant leading
# zeros ("0" when there is no integer part), frac_digits has no trailing zeros.
# The special field is None for finite values, otherwise 'inf' or 'nan'.
DecimalParts = collections.namedtuple(
  'DecimalParts',
  'negative, int_digits, frac_digits, special',
  defaults=(None,))

_NUMBER_RX = re.compile(
  r'\s*(?P<sign>[+-])?'
  r'(?:(?P<int>\d+)(?:\.(?P<frac>\d*))?|\.(?P<ofrac>\d+))'
  r'(?:[eE](?P<exp>[+-]?\d+))?\s*$')
_SPECIAL_RX = re.compile(r'\s*(?P<sign>[+-])?(?P<name>inf|infinity|s?nan)\s*$', re.IGNORECASE)

# Largest decimal point shift accepted, to keep the digit strings bounded.
MAX_SHIFT = 20000


def _to_text(value):
  if isinstance(value, str):
    return value
  if isinstance(value, float):
    # The shortest decimal string which reads back as the same float. The float
    # repr() is used explicitly, subclasses like np.float64 override it.
    return float.__repr__(value)
  if isinstance(value, bool):
    alog.xraise(InvalidInput, f'Not a number: {value!r}')
  if isinstance(value, (int, decimal.Decimal)):
    # str() of large integers is capped by the interpreter, Decimal is not.
    return str(decimal.Decimal(value))

  alog.xraise(InvalidInput, f'Unsupported value type: {value!r} ({type(value)})')


def _shift_point(digits, point):
  if point <= 0:
    return '', '0' * (-point) + digits
  if point >= len(digits):
    return digits + '0' * (point - len(digits)), ''

  return digits[: point], digits[point:]


def normalize(value):
  text = _to_text(value)

  m = _SPECIAL_RX.match(text)
  if m:
    special = 'nan' if m.group('name').lower().endswith('nan') else 'inf'

    return DecimalParts(m.group('sign') == '-', '0', '', special=special)

  m = _NUMBER_RX.match(text)
  if not m:
    alog.xraise(InvalidInput, f'Not a decimal number: {text!r}')

  int_part = m.group('int') or ''
  frac_part = m.group('frac') or m.group('ofrac') or ''
  exp_text = m.group('exp') or '0'
  if len(exp_text.lstrip('+-').lstrip('0')) > len(str(MAX_SHIFT)):
    alog.xraise(InvalidInput, f'Exponent out of supported range: {text!r}')
  exp = int(exp_text)
  if abs(exp) > MAX_SHIFT:
    alog.xraise(InvalidInput, f'Exponent out of supported range: {text!r}')

  int_digits, frac_digits = _shift_point(int_part + frac_part, len(int_part) + exp)

  return DecimalParts(m.group('sign') == '-',
                      int_digits.lstrip('0') or '0',
                      frac_digits.rstrip('0'))


def magnitude(parts):
  # Exact absolute value of a finite DecimalParts.
  scale = 10**len(parts.frac_digits)

  return fractions.Fraction(digits_to_int(parts.int_digits) * scale +
                            digits_to_int(parts.frac_digits), scale)


def digits_to_int(digits):
  # int() of long decimal strings is capped by the interpreter, Decimal is not.
  return int(decimal.Decimal(digits)) if digits else 0


def is_zero(parts):
  return parts.special is None and parts.int_digits == '0' and not parts.frac_digits
