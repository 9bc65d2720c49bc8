import json
import logging

import pytest

from simdmapper.description import Signature
from simdmapper.errors import RegistryError
from simdmapper.registry import Registry, load_registry, default_registry
from simdmapper.shapes import shapes


def add_rule(**kwargs):
  rule = {
      'name': 'Add',
      'shape': 'op2',
      'arg_types': ['Int32x4', 'Int32x4', 'Int32x4'],
      'cpu_feature': 'AVX',
      }
  rule.update(kwargs)
  return rule


def test_from_records():
  registry = Registry.from_records({
      'VPADDD': [add_rule(), add_rule(arg_types=['Int32x8'] * 3, cpu_feature='AVX2')],
      'VEXTRACTF128': [add_rule(name='GetHi', shape='op1',
          arg_types=['Float32x8', 'Float32x4'], const_imm=1)],
      })
  assert len(registry) == 2
  assert 'VPADDD' in registry
  assert sorted(registry) == ['VEXTRACTF128', 'VPADDD']

  sigs = registry.lookup('VPADDD')
  assert isinstance(sigs, tuple)
  assert [s.cpu_feature for s in sigs] == ['AVX', 'AVX2']
  assert sigs[0] == Signature('Add', 'op2', ('Int32x4',) * 3, 'AVX')

  [get_hi] = registry.lookup('VEXTRACTF128')
  assert get_hi.const_imm == '1'
  assert get_hi.result_type == 'Float32x4'
  assert not get_hi.res_in_arg0


def test_doc_is_ignored():
  registry = Registry.from_records({'VPADDD': [add_rule(doc='Add adds two vectors.')]})
  assert registry.lookup('VPADDD') == (Signature('Add', 'op2', ('Int32x4',) * 3, 'AVX'),)


def test_unknown_mnemonic():
  assert Registry.from_records({'VPADDD': [add_rule()]}).lookup('VPADDQ') == ()
  assert Registry().lookup('VPADDD') == ()


def test_registry_is_read_only():
  rules = {'VPADDD': [Signature('Add', 'op2', ('Int32x4',) * 3, 'AVX')]}
  registry = Registry(rules)
  rules['VPADDD'].append(Signature('Add', 'op2', ('Int32x8',) * 3, 'AVX2'))
  rules['VPADDQ'] = []
  assert len(registry.lookup('VPADDD')) == 1
  assert 'VPADDQ' not in registry
  with pytest.raises(TypeError):
    registry._rules['VPADDQ'] = ()


@pytest.mark.parametrize('records', [
    [],
    {'VPADDD': add_rule()},
    {'VPADDD': ['Add']},
    {'VPADDD': [{'name': 'Add', 'shape': 'op2'}]},
    {'VPADDD': [add_rule(arg_types=[])]},
    {'VPADDD': [add_rule(arg_types='Int32x4')]},
    {'VPADDD': [add_rule(cpu_feature=512)]},
    {'VPADDD': [add_rule(arg_types=['Int32x4', 4, 'Int32x4'])]},
    ])
def test_malformed_records(records):
  with pytest.raises(RegistryError):
    Registry.from_records(records)


def test_validate():
  registry = Registry.from_records({
      'VPADDD': [
          add_rule(),
          add_rule(shape='op9'),
          add_rule(arg_types=['Int32x4', 'Int32x4']),
          add_rule(const_imm='one'),
          add_rule(cpu_feature=''),
          ],
      })
  problems = registry.validate()
  assert len(problems) == 4
  assert 'unknown shape op9' in problems[0]
  assert 'takes 3 types, got 2' in problems[1]
  assert 'bad constant immediate one' in problems[2]
  assert 'no cpu feature' in problems[3]


def test_validate_octal_constant():
  registry = Registry.from_records({
      'VEXTRACTF128': [add_rule(name='GetHi', shape='op1',
          arg_types=['Float32x8', 'Float32x4'], const_imm='01')],
      })
  assert registry.validate() == []


def test_validate_checks_the_shape_table(monkeypatch):
  monkeypatch.setitem(shapes, 'op2', shapes['op2']._replace(arity=4))
  problems = Registry.from_records({'VPADDD': [add_rule()]}).validate()
  assert problems == ['op2: operands [1, 0] do not cover 3 sources']


def test_load_registry_logs_problems(tmp_path, caplog):
  path = tmp_path / 'rules.json'
  path.write_text(json.dumps({'VPADDD': [add_rule(shape='op9')]}))
  with caplog.at_level(logging.WARNING, logger='simdmapper.registry'):
    registry = load_registry(path)
  assert 'VPADDD' in registry
  assert 'unknown shape op9' in caplog.text


def test_load_registry_errors(tmp_path):
  with pytest.raises(RegistryError):
    load_registry(tmp_path / 'missing.json')
  path = tmp_path / 'broken.json'
  path.write_text('{"VPADDD": [')
  with pytest.raises(RegistryError):
    load_registry(path)


def test_bundled_registry_is_valid():
  registry = default_registry()
  assert registry is default_registry()
  assert registry.validate() == []
  for mnemonic in ('VPADDD', 'VPINSRD', 'VHADDPS', 'VEXTRACTF128', 'VDIVPD'):
    assert len(registry.lookup(mnemonic)) > 0
