import os

import yaml


def to_type(v, vtype):
  # Strings stay verbatim, YAML would turn "0011" into the integer 11.
  if vtype is str:
    return str(v)

  return vtype(yaml.safe_load(v)) if isinstance(v, str) else vtype(v)


def to_bool(v):
  return to_type(v, bool)


def getenv(name, dtype=None, defval=None):
  # os.getenv expects the default value to be a string, so cannot be passed in there.
  env = os.getenv(name, None)
  if env is None:
    env = defval
  if env is not None:
    return to_type(env, dtype) if dtype is not None else env


def bool_arg(v):
  # argparse type= helper, so that "--rounding false" does what it reads.
  return to_bool(v)
