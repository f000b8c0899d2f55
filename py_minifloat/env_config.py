import argparse

from . import utils as ut


def _arg_type(value):
  return ut.bool_arg if isinstance(value, bool) else type(value)


class EnvConfig:
  """Defaults declared as public class attributes.

  Each attribute can be overridden by an environment variable with the same
  name (parsed as YAML into the type of the default), and then by a --NAME
  command line option found within ``args`` (``sys.argv`` when None).
  """

  def __init__(self, args=None):
    parser = argparse.ArgumentParser(add_help=False)
    state = dict()
    for name in dir(self):
      if not name.startswith('_'):
        value = getattr(self, name)
        if not callable(value):
          env = ut.getenv(name, dtype=type(value))
          if env is not None:
            value = env

          parser.add_argument(f'--{name}', type=_arg_type(value))
          state[name] = value

    pargs, _ = parser.parse_known_args(args=args)
    for name, value in state.items():
      avalue = getattr(pargs, name, None)
      setattr(self, name, value if avalue is None else avalue)
