import logging

from simdmapper.binder import Bound, bind_all
from simdmapper.codegen import emit
from simdmapper.constants import (
    CANDIDATE_SEPARATOR, ILLEGAL_INPUT_MESSAGE, NO_MAPPING_MESSAGE)
from simdmapper.errors import IllegalInputError
from simdmapper.lex import tokenize
from simdmapper.registry import default_registry

logger = logging.getLogger(__name__)

def candidates(inst, registry):
  '''
  render every candidate that binds, in registry order
  '''
  outcomes = bind_all(inst, registry.lookup(inst.mnemonic))
  rendered = (emit(o.state) for o in outcomes if isinstance(o, Bound))
  return [code for code in rendered if code != '']

def map_instruction(text, registry=None):
  '''
  Map one Go assembly instruction to archsimd calls.

  Always returns text: the candidates separated by "// Or" lines,
  ILLEGAL_INPUT_MESSAGE or NO_MAPPING_MESSAGE.
  '''
  if registry is None:
    registry = default_registry()
  try:
    inst = tokenize(text)
  except IllegalInputError as e:
    logger.debug('illegal input: %s', e)
    return ILLEGAL_INPUT_MESSAGE

  found = candidates(inst, registry)
  if len(found) == 0:
    logger.debug('no mapping for %s (%d rules)', inst.mnemonic, len(registry.lookup(inst.mnemonic)))
    return NO_MAPPING_MESSAGE
  return CANDIDATE_SEPARATOR.join(found)

def is_comment(line):
  line = line.strip()
  return line == '' or line.startswith('//') or line.startswith('#')

def map_lines(lines, registry=None):
  '''
  map each instruction line, skipping blank and comment lines.
  yields (<line>, <result>)
  '''
  if registry is None:
    registry = default_registry()
  for line in lines:
    if is_comment(line):
      continue
    line = line.strip()
    yield line, map_instruction(line, registry)
