import numpy as np

from . import alog
from . import fp_codec as fpc
from . import fp_format as fpf
from . import fp_utils as fpu


MAX_TABLE_BITS = 20


def _code_dtype(fmt):
  return np.uint64 if fmt.total_bits <= 64 else object


def _pyvalue(v):
  return v.item() if isinstance(v, np.generic) else v


def value_table(fmt):
  if fmt.total_bits > MAX_TABLE_BITS:
    alog.xraise(fpf.InvalidLayout,
                f'Format {fmt.name} has too many patterns ({fmt.total_bits} bits, ' \
                f'max is {MAX_TABLE_BITS})')

  codes = np.arange(1 << fmt.total_bits, dtype=np.uint64)
  values = np.array([fpc.decode(fmt, int(c)) for c in codes], dtype=np.float64)

  return codes, values


def finite_values(fmt):
  _, values = value_table(fmt)

  # np.unique() merges -0.0 and 0.0, and sorts.
  return np.unique(values[np.isfinite(values)])


def encode_array(fmt, values, rounding=True):
  values = np.asarray(values)
  codes = np.empty(values.shape, dtype=_code_dtype(fmt))
  for idx, v in np.ndenumerate(values):
    codes[idx] = fpu.bits_to_code(fpc.encode(fmt, _pyvalue(v), rounding=rounding))

  return codes


def decode_array(fmt, codes):
  codes = np.asarray(codes)
  values = np.empty(codes.shape, dtype=np.float64)
  for idx, c in np.ndenumerate(codes):
    values[idx] = fpc.decode(fmt, int(c))

  return values
