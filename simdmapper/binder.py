import logging
import re
from collections import namedtuple

from simdmapper.constants import MASK_PREFIX, MASKED_FEATURE, LOAD_PREFIX
from simdmapper.description import REG, MEM, IMM
from simdmapper.reg_types import fits_reg, is_vector_type, mask_type, IMM8_TYPE
from simdmapper import shapes as shape_table
from simdmapper.shapes import (
    BIND_REG, BIND_SCALAR, BIND_IMM, BIND_IMM_SPLIT, get_arity, num_types)

logger = logging.getLogger(__name__)

# outcome of binding one instruction against one signature
Bound = namedtuple('Bound', ['state'])
Inapplicable = namedtuple('Inapplicable', ['reason'])
Malformed = namedtuple('Malformed', ['reason'])

octal_re = re.compile(r'0[0-7]+')

class BinderState:
  '''
  The call being built for one candidate.

  ops holds the rendered arguments in call order:
  ops[0] is the receiver and ops[-1] the destination.
  '''
  def __init__(self, name, cpu_feature, mask_reg=None):
    self.name = name
    self.cpu_feature = cpu_feature
    self.mask_reg = mask_reg
    self.ops = []
    self.notes = []
    self.result_type = ''
    self.ok = True
    self.reason = None

  def fail(self, reason):
    if self.ok:
      self.ok = False
      self.reason = reason

  def bind_reg(self, opr, typename):
    if opr.kind != REG or not fits_reg(opr.name, typename):
      self.bind_load(opr, typename)
      return
    self.notes.append(f'{opr.name} is of type {typename}')
    self.result_type = typename
    self.ops.append(opr.name)

  def bind_scalar(self, opr, typename):
    if opr.kind != REG or not fits_reg(opr.name, typename):
      self.bind_load(opr, typename)
      return
    self.ops.append(f'{opr.name}.AsUint8x16().GetElem(0)')
    self.notes.append(f'{opr.name} must be an 128-bit vector')

  def bind_imm(self, opr, typename):
    if opr.kind != IMM or typename != IMM8_TYPE:
      self.fail(f'{opr.name} is not an immediate of type {typename}')
      return
    self.ops.append(opr.name)

  def bind_imm_split(self, opr, typename1, typename2):
    if opr.kind != IMM or typename1 != IMM8_TYPE or typename2 != IMM8_TYPE:
      self.fail(f'{opr.name} can not be split into {typename1} and {typename2}')
      return
    self.ops.append(f'{opr.name}&0b11')
    self.ops.append(f'{opr.name}>>4&0b11')

  def bind_load(self, opr, typename):
    if opr.kind != MEM:
      self.fail(f'{opr.name} does not fit {typename}')
      return
    if is_vector_type(typename):
      self.ops.append(f'{LOAD_PREFIX}{typename}(*{opr.name})')
      return
    # scalar load, just dereference the pointer
    self.ops.append(f'*{opr.name}')

  def bind_mask(self):
    if self.mask_reg is None:
      return
    # a rule with no feature stays unrenderable
    if self.cpu_feature and not self.cpu_feature.startswith(MASKED_FEATURE):
      self.cpu_feature = MASKED_FEATURE
    self.notes.append(f'{self.mask_reg} is of type {mask_type(self.result_type)}')

def parse_imm(text):
  # a leading zero means octal, 010 is 8
  base = 8 if octal_re.fullmatch(text) else 0
  try:
    return int(text, base)
  except ValueError:
    return None

def is_mask(opr):
  return opr.kind == REG and opr.name.startswith(MASK_PREFIX)

def gate_const_imm(operands, const_imm):
  '''
  return the operands without the immediate,
  or None if the immediate isn't the constant we want
  '''
  if len(operands) == 0 or operands[0].kind != IMM:
    return None
  imm = parse_imm(operands[0].name)
  if imm is None or imm != parse_imm(const_imm):
    return None
  return operands[1:]

def split_mask(operands):
  '''
  a mask register is the second to last operand.

  return <mask name or None>, <remaining operands>,
  or None if the mask is ambiguous
  '''
  if len(operands) < 2 or not is_mask(operands[-2]):
    return None, operands
  if sum(1 for opr in operands if is_mask(opr)) != 1:
    return None
  return operands[-2].name, operands[:-2] + operands[-1:]

def bind(inst, sig):
  '''
  bind the operands of `inst` to the arguments of `sig`

  returns Bound, Inapplicable or Malformed
  '''
  shape = shape_table.shapes.get(sig.shape)
  if shape is None:
    return Malformed(f'unknown shape {sig.shape}')
  if len(sig.arg_types) < num_types(shape):
    return Malformed(
        f'{sig.shape} needs {num_types(shape)} types, got {len(sig.arg_types)}')

  operands = list(inst.operands)
  if sig.const_imm is not None:
    operands = gate_const_imm(operands, sig.const_imm)
    if operands is None:
      return Inapplicable(f'immediate is not {sig.const_imm}')

  masked = split_mask(operands)
  if masked is None:
    return Inapplicable('more than one mask register')
  mask_reg, operands = masked

  arity = get_arity(shape, sig.res_in_arg0)
  if len(operands) != arity:
    return Inapplicable(f'{sig.shape} takes {arity} operands, got {len(operands)}')

  state = BinderState(sig.name, sig.cpu_feature, mask_reg)
  for slot in shape.slots:
    opr = operands[slot.operand]
    types = [sig.arg_types[i] for i in slot.types]
    if slot.bind == BIND_REG:
      state.bind_reg(opr, *types)
    elif slot.bind == BIND_SCALAR:
      state.bind_scalar(opr, *types)
    elif slot.bind == BIND_IMM:
      state.bind_imm(opr, *types)
    else:
      assert slot.bind == BIND_IMM_SPLIT
      state.bind_imm_split(opr, *types)
    if not state.ok:
      return Inapplicable(state.reason)

  if sig.res_in_arg0:
    dest = operands[shape.slots[0].operand]
  else:
    dest = operands[-1]
  state.bind_reg(dest, sig.result_type)
  if not state.ok:
    return Inapplicable(state.reason)

  state.bind_mask()
  return Bound(state)

def bind_all(inst, sigs):
  '''
  bind `inst` against every candidate, in order
  '''
  outcomes = []
  for sig in sigs:
    outcome = bind(inst, sig)
    if not isinstance(outcome, Bound):
      logger.debug('%s -> %s(%s): skipped, %s',
          inst.mnemonic, sig.name, ', '.join(sig.arg_types), outcome.reason)
    outcomes.append(outcome)
  return outcomes
