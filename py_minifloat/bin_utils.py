import fractions

from . import alog
from . import dec_normalize as dn


def int_to_bits(n):
  """Binary digits of a non negative integer, most significant first ("0" for 0)."""
  if n < 0:
    alog.xraise(dn.InvalidInput, f'Cannot convert negative values: {n}')

  bits = []
  while True:
    n, r = divmod(n, 2)
    bits.append('1' if r else '0')
    if n == 0:
      break

  return ''.join(reversed(bits))


def frac_to_bits(num, den, limit):
  """Binary digits of the fraction num/den in [0, 1), by repeated doubling.

  Stops when the remainder becomes zero, or after limit digits. Arithmetic is
  on integers, so the generated digits are exact.
  """
  if not 0 <= num < den:
    alog.xraise(dn.InvalidInput, f'Fraction out of [0, 1) range: {num}/{den}')

  bits = []
  while num > 0 and len(bits) < limit:
    num *= 2
    if num >= den:
      bits.append('1')
      num -= den
    else:
      bits.append('0')

  return ''.join(bits)


def decimal_frac_to_bits(frac_digits, limit):
  if not frac_digits:
    return ''

  return frac_to_bits(dn.digits_to_int(frac_digits), 10**len(frac_digits), limit)


def frac_bits_value(bits):
  # Sum of bit_i * 2^-(i + 1), computed exactly.
  if not bits:
    return fractions.Fraction(0)

  return fractions.Fraction(int(bits, 2), 1 << len(bits))


def increment_bits(bits):
  """Adds one to the fixed width binary digit string bits.

  Returns the new digits (same width) and the carry out of the most
  significant position.
  """
  digits = [int(b) for b in bits]
  carry = 1
  for i in range(len(digits) - 1, -1, -1):
    if carry == 0:
      break
    s = digits[i] + carry
    digits[i], carry = s & 1, s >> 1

  return ''.join(str(d) for d in digits), carry


def zfill_left(bits, n):
  return '0' * max(0, n - len(bits)) + bits


def zfill_right(bits, n):
  return bits + '0' * max(0, n - len(bits))
