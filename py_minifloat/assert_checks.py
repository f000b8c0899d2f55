import inspect
import logging

# Plain logging module here, to keep this module free of local dependencies.


def _get_caller_info(n_back):
  frame = inspect.stack()[n_back + 1][0]
  caller = inspect.getframeinfo(frame)
  if caller.code_context:
    return f'{caller.filename}:{caller.lineno}: {caller.code_context[0].strip()}'

  return f'{caller.filename}:{caller.lineno}'


def _report_fail(level, op, *args, **kwargs):
  fmsg = kwargs.get('msg')
  cinfo = _get_caller_info(2)
  if fmsg:
    cinfo = f'{cinfo}; {fmsg}'
  if op:
    assert len(args) == 2, len(args)
    msg = f'{args[0]} {op} {args[1]} failed from {cinfo}'
  else:
    msg = f'Check failed from {cinfo}'

  logging.log(level, msg)

  raise AssertionError(msg)


def check(a, level=logging.ERROR, msg=None):
  if not a:
    _report_fail(level, None, msg=msg)


def check_eq(a, b, level=logging.ERROR, msg=None):
  if not (a == b):
    _report_fail(level, '==', a, b, msg=msg)


def check_le(a, b, level=logging.ERROR, msg=None):
  if not (a <= b):
    _report_fail(level, '<=', a, b, msg=msg)


def check_ge(a, b, level=logging.ERROR, msg=None):
  if not (a >= b):
    _report_fail(level, '>=', a, b, msg=msg)
