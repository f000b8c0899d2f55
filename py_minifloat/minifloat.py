import argparse
import typing

from . import alog
from . import app_main as am
from . import fp_codec as fpc
from . import fp_format as fpf
from . import fp_table as fpt
from . import fp_utils as fpu


def _config():
  return fpc.CodecConfig(args=[])


def _get_format(format):
  return fpf.get_format(format or _config().MINIFLOAT_FORMAT)


@am.Main
def encode(values: typing.List[str], format: str = None, rounding: bool = None):
  fmt = _get_format(format)
  if rounding is None:
    rounding = _config().MINIFLOAT_ROUNDING

  results = []
  for value in values:
    bits = fpc.encode(fmt, value, rounding=rounding)
    print(f'{value}\t{bits}')
    results.append(bits)

  return results


@am.Main
def decode(values: typing.List[str], format: str = None):
  fmt = _get_format(format)

  results = []
  for bits in values:
    res = fpc.try_decode(fmt, bits)
    if res.error is not None:
      alog.error(f'Invalid {fmt.name} pattern: {res.error}')
      print(f'{bits}\tERROR: {res.error}')
    else:
      print(f'{bits}\t{res.value!r}')
    results.append(res)

  return results


@am.Main
def table(format: str = None):
  fmt = _get_format(format)

  codes, values = fpt.value_table(fmt)
  for code, value in zip(codes, values):
    print(f'{fpu.code_to_bits(fmt, int(code))}\t{float(value)!r}')

  return codes, values


@am.Main
def info(format: str = None):
  fmt = _get_format(format)

  consts = dict(
    name=fmt.name,
    exponent_bits=fmt.exponent_bits,
    mantissa_bits=fmt.mantissa_bits,
    total_bits=fmt.total_bits,
    bias=fmt.bias,
    max_finite_magnitude=fmt.max_finite_magnitude,
    max_value=fmt.max_value,
    min_normal=fmt.min_normal,
    min_subnormal=fmt.min_subnormal,
    fraction_bits_limit=fmt.fraction_bits_limit,
  )
  for name, value in consts.items():
    print(f'{name}\t{value}')

  return consts


_COMMANDS = {
  'encode': (encode, 'Encodes decimal values into bit strings'),
  'decode': (decode, 'Decodes bit strings into values'),
  'table': (table, 'Lists every pattern of the format with its value'),
  'info': (info, 'Shows the constants of the format'),
}


def _run(args):
  return args.command_fn(args)


def create_parser():
  parser = argparse.ArgumentParser(
    description='Minifloat encoder/decoder',
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
  )
  subparsers = parser.add_subparsers(dest='command', required=True)
  for name, (cmd, help_str) in _COMMANDS.items():
    cparser = subparsers.add_parser(name, help=help_str)
    cmd.add_arguments(cparser)
    cparser.set_defaults(command_fn=cmd)

  return parser


def main(args=None):
  am.main(create_parser(), _run, args=args)


if __name__ == '__main__':
  main()
