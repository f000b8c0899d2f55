import logging

import pytest

from py_minifloat import alog


@pytest.fixture(autouse=True)
def restore_logging():
  root = logging.getLogger()
  handlers, level = list(root.handlers), root.level
  alog_level = alog._LEVEL

  yield

  for handler in list(root.handlers):
    if handler not in handlers:
      root.removeHandler(handler)
  for handler in handlers:
    if handler not in root.handlers:
      root.addHandler(handler)
  root.setLevel(level)
  alog.set_current_level(alog_level, set_logger=False)


def pytest_make_parametrize_id(config, val, argname):
  # str() of very large ints exceeds the interpreter's digit limit.
  if isinstance(val, int) and not isinstance(val, bool) and val.bit_length() > 10000:
    return f'{argname}_bigint_{val.bit_length()}bits'
  return None
