import argparse
import functools
import inspect
import signal
import typing

import yaml

from . import alog
from . import utils as ut


class TerminationError(Exception):
  pass


def _sig_handler(sig, frame):
  if sig == signal.SIGINT:
    raise KeyboardInterrupt()
  elif sig == signal.SIGTERM:
    raise TerminationError()


def _signals_setup():
  prev = dict()
  for sig in (signal.SIGINT, signal.SIGTERM):
    prev[sig] = signal.signal(sig, _sig_handler)

  return prev


def _signals_restore(prev):
  for sig, handler in prev.items():
    signal.signal(sig, handler)


def _get_init_modules():
  # Objects returned by the get_main_config() API of the modules listed here
  # must have an add_arguments(parser) API to add command line arguments, and a
  # config_module(args) API to configure themselves with the parsed arguments.
  # An optional cleanup_module() is called when exiting the main function.
  modules = []
  modules.append(alog.get_main_config())

  return tuple(modules)


def _add_arguments(init_modules, parser):
  for module in init_modules:
    module.add_arguments(parser)


def _config_modules(init_modules, args):
  for module in init_modules:
    module.config_module(args)


def _cleanup_modules(init_modules):
  for module in init_modules:
    if (cleanup_module := getattr(module, 'cleanup_module', None)) is not None:
      cleanup_module()


def _main(parser, init_modules, mainfn, args):
  if isinstance(mainfn, Main):
    mainfn.add_arguments(parser)

  _add_arguments(init_modules, parser)

  parsed_args = parser.parse_args(args=args)
  _config_modules(init_modules, parsed_args)

  return mainfn(parsed_args)


def main(parser, mainfn, args=None):
  init_modules = _get_init_modules()
  prev_signals = _signals_setup()
  try:
    return _main(parser, init_modules, mainfn, args)
  except Exception as ex:
    alog.exception(ex, exmsg='Exception while running main function')
    raise
  finally:
    _cleanup_modules(init_modules)
    _signals_restore(prev_signals)


def basic_main(mainfn, description='Basic Main', args=None):
  parser = argparse.ArgumentParser(
    description=description,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
  )

  return main(parser, mainfn, args=args)


def _sequence_type(ptype):
  if typing.get_origin(ptype) in (list, tuple):
    targs = typing.get_args(ptype)

    return targs[0] if targs else str


# Turns a function into an argparse driven command. Use as:
#
# @app_main.Main
# def my_command(arg, ..., kwarg=17, ...):
#   ...
#
# my_command.add_arguments(parser)
# ...
# my_command(parser.parse_args())
#
# Positional parameters become positional arguments, the ones with defaults
# become --NAME options. List annotations take one or more values.
class Main:

  def __init__(self, func):
    self._func = func
    self._sig = inspect.signature(func)
    functools.update_wrapper(self, func)

  def __call__(self, parsed_args):
    args, kwargs = [], {}
    for n, p in self._sig.parameters.items():
      pv = getattr(parsed_args, n, None)
      if p.kind == p.POSITIONAL_ONLY:
        args.append(pv)
      else:
        kwargs[n] = pv

    return self._func(*args, **kwargs)

  def add_arguments(self, parser):
    fname = self._func.__name__

    for n, p in self._sig.parameters.items():
      choices, nargs = None, None
      defval = p.default if p.default is not p.empty else None
      if p.annotation is not p.empty:
        ptype = p.annotation
        if (stype := _sequence_type(ptype)) is not None:
          ptype, nargs = stype, '+'
        if typing.get_origin(ptype) == typing.Literal:
          choices = typing.get_args(ptype)
          ptype = type(choices[0])

        type_cast = functools.partial(ut.to_type, vtype=ptype)
      elif defval is not None:
        ptype = type(defval)
        type_cast = functools.partial(ut.to_type, vtype=ptype)
      else:
        ptype, type_cast = str, yaml.safe_load

      help_str = f'Argument "{n}" (type={ptype.__name__}) of function {fname}(...)'
      if ptype is bool:
        parser.add_argument(f'--{n}',
                            action=argparse.BooleanOptionalAction,
                            default=defval,
                            help=help_str)
      elif p.default is p.empty or p.kind == p.POSITIONAL_ONLY:
        parser.add_argument(n,
                            metavar=n.upper(),
                            nargs=nargs,
                            type=type_cast,
                            default=defval,
                            choices=choices,
                            help=help_str)
      else:
        parser.add_argument(f'--{n}',
                            nargs=nargs,
                            type=type_cast,
                            default=defval,
                            choices=choices,
                            help=help_str)
