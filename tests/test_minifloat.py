import pytest

from py_minifloat import minifloat


def _lines(capsys):
  return capsys.readouterr().out.splitlines()


@pytest.fixture(autouse=True)
def no_env_config(monkeypatch):
  monkeypatch.delenv('MINIFLOAT_FORMAT', raising=False)
  monkeypatch.delenv('MINIFLOAT_ROUNDING', raising=False)


def test_encode(capsys):
  minifloat.main(['encode', '--format', 'fp8_e4m3', '-2.25', '1.5', '1e6'])

  assert _lines(capsys) == ['-2.25\t11000001', '1.5\t00111100', '1e6\t01111000']


def test_encode_rounding_flag(capsys):
  minifloat.main(['encode', '--format', 'e4m3', '--no-rounding', '1.0625'])
  minifloat.main(['encode', '--format', 'e4m3', '--rounding', '1.0625'])

  assert _lines(capsys) == ['1.0625\t00111000', '1.0625\t00111001']


def test_decode(capsys):
  minifloat.main(['decode', '--format', 'e4m3', '11000001', '01111000', '0101'])

  lines = _lines(capsys)
  assert lines[0] == '11000001\t-2.25'
  assert lines[1] == '01111000\tinf'
  assert lines[2].startswith('0101\tERROR: ')


def test_decode_keeps_leading_zeros(capsys):
  minifloat.main(['decode', '--format', 'e4m3', '00111100'])

  assert _lines(capsys) == ['00111100\t1.5']


def test_info(capsys):
  minifloat.main(['info', '--format', 'fp16'])

  lines = _lines(capsys)
  assert 'bias\t15' in lines
  assert 'max_value\t65504' in lines
  assert 'max_finite_magnitude\t32767' in lines


def test_table(capsys):
  minifloat.main(['table', '--format', 'e2m1'])

  lines = _lines(capsys)
  assert len(lines) == 16
  assert lines[0] == '0000\t0.0'
  assert lines[3] == '0011\t1.5'


def test_env_format(capsys, monkeypatch):
  monkeypatch.setenv('MINIFLOAT_FORMAT', 'fp16')
  monkeypatch.setenv('MINIFLOAT_ROUNDING', 'false')

  minifloat.main(['encode', '1.0', '1.00048828125'])

  assert _lines(capsys) == ['1.0\t0011110000000000', '1.00048828125\t0011110000000000']


def test_bad_format():
  with pytest.raises(ValueError):
    minifloat.main(['info', '--format', 'e0m3'])


def test_missing_command():
  with pytest.raises(SystemExit):
    minifloat.main([])
