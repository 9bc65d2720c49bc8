import functools
import json
import logging
from pathlib import Path
from types import MappingProxyType

from simdmapper.constants import DEFAULT_REGISTRY_PATH
from simdmapper.description import Signature
from simdmapper.errors import RegistryError
from simdmapper.binder import parse_imm
from simdmapper.shapes import shapes, num_types, check_shapes

logger = logging.getLogger(__name__)

required_fields = ('name', 'shape', 'arg_types', 'cpu_feature')
# doc is free text for people reading the dataset
optional_fields = ('const_imm', 'res_in_arg0', 'doc')

def signature_from_record(mnemonic, record):
  if not isinstance(record, dict):
    raise RegistryError(f'{mnemonic}: rule must be an object, got {record!r}')
  missing = [f for f in required_fields if f not in record]
  if missing:
    raise RegistryError(f'{mnemonic}: rule is missing {", ".join(missing)}')
  unknown = set(record) - set(required_fields) - set(optional_fields)
  if unknown:
    raise RegistryError(f'{mnemonic}: unknown fields {", ".join(sorted(unknown))}')
  for f in ('name', 'shape', 'cpu_feature'):
    if not isinstance(record[f], str):
      raise RegistryError(f'{mnemonic}: {f} must be a string, got {record[f]!r}')
  arg_types = record['arg_types']
  if not isinstance(arg_types, list) or len(arg_types) == 0:
    raise RegistryError(f'{mnemonic}: arg_types must be a non-empty list')
  if not all(isinstance(ty, str) for ty in arg_types):
    raise RegistryError(f'{mnemonic}: arg_types must be type names')
  const_imm = record.get('const_imm')
  if const_imm is not None:
    # the dataset may spell it as a number or as text in any radix
    const_imm = str(const_imm)
  return Signature(
      name=record['name'],
      shape=record['shape'],
      arg_types=tuple(arg_types),
      cpu_feature=record['cpu_feature'],
      const_imm=const_imm,
      res_in_arg0=bool(record.get('res_in_arg0', False)))

class Registry:
  '''
  Read-only map from a mnemonic to its candidate signatures.

  The order of the candidates is their priority.
  '''
  def __init__(self, rules=None):
    frozen = {
        mnemonic: tuple(sigs)
        for mnemonic, sigs in (rules or {}).items()
        }
    self._rules = MappingProxyType(frozen)

  @classmethod
  def from_records(cls, records):
    if not isinstance(records, dict):
      raise RegistryError('the rule dataset must map mnemonics to lists of rules')
    rules = {}
    for mnemonic, sig_records in records.items():
      if not isinstance(sig_records, list):
        raise RegistryError(f'{mnemonic}: rules must be a list')
      rules[mnemonic] = [signature_from_record(mnemonic, r) for r in sig_records]
    return cls(rules)

  @classmethod
  def from_json(cls, path):
    try:
      with open(path) as f:
        records = json.load(f)
    except (OSError, ValueError) as e:
      raise RegistryError(f'failed to read rules from {path}: {e}') from e
    return cls.from_records(records)

  def lookup(self, mnemonic):
    return self._rules.get(mnemonic, ())

  def validate(self):
    '''
    check every rule against the shape table, returns a list of problems
    '''
    problems = check_shapes()
    for mnemonic, sigs in self._rules.items():
      for sig in sigs:
        shape = shapes.get(sig.shape)
        if shape is None:
          problems.append(f'{mnemonic} -> {sig.name}: unknown shape {sig.shape}')
          continue
        if len(sig.arg_types) != num_types(shape):
          problems.append(
              f'{mnemonic} -> {sig.name}: {sig.shape} takes {num_types(shape)} types, '
              f'got {len(sig.arg_types)}')
        if sig.const_imm is not None and parse_imm(sig.const_imm) is None:
          problems.append(f'{mnemonic} -> {sig.name}: bad constant immediate {sig.const_imm}')
        if not sig.cpu_feature:
          problems.append(f'{mnemonic} -> {sig.name}: no cpu feature')
    return problems

  def __contains__(self, mnemonic):
    return mnemonic in self._rules

  def __iter__(self):
    return iter(self._rules)

  def __len__(self):
    return len(self._rules)

def load_registry(path=None):
  if path is None:
    path = DEFAULT_REGISTRY_PATH
  registry = Registry.from_json(Path(path))
  for problem in registry.validate():
    logger.warning('%s: %s', path, problem)
  logger.debug('loaded %d mnemonics from %s', len(registry), path)
  return registry

@functools.lru_cache(maxsize=None)
def default_registry():
  return load_registry()
