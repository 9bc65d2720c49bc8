import os
from pathlib import Path

# predicate mask registers are K0..K7
MASK_PREFIX = 'K'

# a masked call needs at least this feature
MASKED_FEATURE = 'AVX512'

FEATURE_NAMESPACE = 'archsimd.X86'
LOAD_PREFIX = 'archsimd.Load'

CANDIDATE_SEPARATOR = '\n// Or\n'

ILLEGAL_INPUT_MESSAGE = 'Illegal input'
NO_MAPPING_MESSAGE = (
    'Missing a direct translation for this instruction, '
    'but similar instructions might be available. '
    'Please check the documentation at: https://pkg.go.dev/simd/archsimd')

DEFAULT_REGISTRY_PATH = Path(__file__).parent / 'data' / 'registry.json'
REGISTRY_PATH_ENV = 'SIMDMAPPER_REGISTRY'

def registry_path_from_env():
  path = os.environ.get(REGISTRY_PATH_ENV)
  if not path:
    return DEFAULT_REGISTRY_PATH
  return Path(path)
