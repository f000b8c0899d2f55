import collections
import fractions
import re

from . import alog


class InvalidLayout(ValueError):
  pass


_FormatBase = collections.namedtuple('FormatDescriptor', 'exponent_bits, mantissa_bits')


class FormatDescriptor(_FormatBase):
  """Layout of a minifloat: sign bit, exponent_bits, mantissa_bits.

  Immutable (a namedtuple), so a single instance can be shared by any number
  of encode/decode calls.
  """

  __slots__ = ()

  def __new__(cls, exponent_bits, mantissa_bits):
    for name, value in (('exponent_bits', exponent_bits), ('mantissa_bits', mantissa_bits)):
      if isinstance(value, bool) or not isinstance(value, int):
        alog.xraise(InvalidLayout, f'The {name} must be an integer: {value!r}')
    if exponent_bits < 1:
      alog.xraise(InvalidLayout, f'At least one exponent bit is required: {exponent_bits}')
    if mantissa_bits < 0:
      alog.xraise(InvalidLayout, f'Negative mantissa width: {mantissa_bits}')

    return super().__new__(cls, exponent_bits, mantissa_bits)

  @property
  def total_bits(self):
    return 1 + self.exponent_bits + self.mantissa_bits

  @property
  def bias(self):
    return (1 << (self.exponent_bits - 1)) - 1

  @property
  def max_finite_magnitude(self):
    # Largest integer magnitude expressible by total_bits - 1 bits. This is not
    # the largest finite value of the format, which is max_value.
    return (1 << (self.total_bits - 1)) - 1

  @property
  def max_exponent(self):
    return (1 << self.exponent_bits) - 1

  @property
  def max_value(self):
    if self.max_exponent == 1:
      # Single exponent bit: no normal binade, the top is the largest subnormal.
      sig = fractions.Fraction((1 << self.mantissa_bits) - 1, 1 << self.mantissa_bits)

      return sig * pow2(1 - self.bias)

    sig = fractions.Fraction((1 << (self.mantissa_bits + 1)) - 1, 1 << self.mantissa_bits)

    return sig * pow2(self.max_exponent - 1 - self.bias)

  @property
  def min_normal(self):
    return pow2(1 - self.bias)

  @property
  def min_subnormal(self):
    return pow2(1 - self.bias - self.mantissa_bits)

  @property
  def fraction_bits_limit(self):
    # Cap on the number of fractional binary digits generated while encoding.
    # Values needing more digits than this lose precision, and magnitudes whose
    # first set bit lies beyond it are encoded as zero.
    return self.total_bits + 1

  @property
  def name(self):
    return f'e{self.exponent_bits}m{self.mantissa_bits}'

  def __repr__(self):
    return f'FormatDescriptor(exponent_bits={self.exponent_bits}, ' \
      f'mantissa_bits={self.mantissa_bits})'


def pow2(n):
  return fractions.Fraction(1 << n) if n >= 0 else fractions.Fraction(1, 1 << -n)


def create_descriptor(exponent_bits, mantissa_bits):
  return FormatDescriptor(exponent_bits, mantissa_bits)


FORMATS = {
  'fp8_e4m3': FormatDescriptor(4, 3),
  'fp8_e5m2': FormatDescriptor(5, 2),
  'fp16': FormatDescriptor(5, 10),
  'bf16': FormatDescriptor(8, 7),
  'fp32': FormatDescriptor(8, 23),
  'fp64': FormatDescriptor(11, 52),
}

_EXPMANT_RX = r'e(\d+)m(\d+)$'

def get_format(name):
  if isinstance(name, FormatDescriptor):
    return name

  fmt = FORMATS.get(name.lower())
  if fmt is None:
    m = re.match(_EXPMANT_RX, name.lower())
    if not m:
      alog.xraise(InvalidLayout, f'Unknown format "{name}", valid are ' \
                  f'{", ".join(sorted(FORMATS))} or eXmY')

    fmt = FormatDescriptor(int(m.group(1)), int(m.group(2)))

  return fmt
