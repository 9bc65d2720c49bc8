'''
Operand shapes.

A shape says which (gated, unmasked) operand goes to which argument slot of the
archsimd call. Operands are numbered in Go assembler order, so the destination
is normally the last one. The first slot is the receiver of the method call.
'''
from collections import namedtuple

# how an operand is bound to a slot
BIND_REG = 'reg' # a vector or scalar value, or a load from memory
BIND_SCALAR = 'scalar' # element 0 of a 128-bit register
BIND_IMM = 'imm' # an 8-bit immediate
BIND_IMM_SPLIT = 'imm_split' # two 2-bit fields of one 8-bit immediate

# types are indices into Signature.arg_types
Slot = namedtuple('Slot', ['bind', 'operand', 'types'])

# arity is the number of operands the shape consumes.
# if separate_dest is set the destination is an operand of its own
# (the last one), otherwise it doubles as the last source.
Shape = namedtuple('Shape', ['slots', 'arity', 'separate_dest'])

def reg(operand, ty):
  return Slot(BIND_REG, operand, (ty,))

def scalar(operand, ty):
  return Slot(BIND_SCALAR, operand, (ty,))

def imm(operand, ty):
  return Slot(BIND_IMM, operand, (ty,))

def imm_split(operand, ty1, ty2):
  return Slot(BIND_IMM_SPLIT, operand, (ty1, ty2))

shapes = {
    'op1': Shape([reg(0, 0)], 2, True),
    'op2': Shape([reg(1, 0), reg(0, 1)], 3, True),
    'op2_21': Shape([reg(0, 0), reg(1, 1)], 3, True),
    'op3': Shape([reg(2, 0), reg(1, 1), reg(0, 2)], 3, False),
    'op3_21': Shape([reg(1, 0), reg(2, 1), reg(0, 2)], 3, False),
    'op3_231Type1': Shape([reg(1, 0), reg(0, 1), reg(2, 2)], 3, False),
    'op4': Shape([reg(3, 0), reg(2, 1), reg(1, 2), reg(0, 3)], 4, False),
    'op4_231Type1': Shape([reg(2, 0), reg(1, 1), reg(3, 2), reg(0, 3)], 4, False),
    'op4_31': Shape([reg(1, 0), reg(2, 1), reg(3, 2), reg(0, 3)], 4, False),

    'op2VecAsScalar': Shape([reg(1, 0), scalar(0, 1)], 3, True),
    'op3VecAsScalar': Shape([reg(2, 0), scalar(1, 1), reg(0, 2)], 3, False),

    'op1Imm8': Shape([reg(1, 0), imm(0, 1)], 3, True),
    'op2Imm8': Shape([reg(2, 0), imm(0, 1), reg(1, 2)], 4, True),
    'op2Imm8_2I': Shape([reg(2, 0), reg(1, 1), imm(0, 2)], 4, True),
    'op2Imm8_II': Shape([reg(2, 0), imm_split(0, 1, 2), reg(1, 3)], 4, True),
    'op3Imm8': Shape([reg(3, 0), imm(0, 1), reg(2, 2), reg(1, 3)], 4, False),
    'op3Imm8_2I': Shape([reg(3, 0), reg(2, 1), imm(0, 2), reg(1, 3)], 4, False),
    'op4Imm8': Shape([reg(4, 0), imm(0, 1), reg(3, 2), reg(2, 3), reg(1, 4)], 5, False),
    }

# same operand layout, different API family
shapes['op2_21Type1'] = shapes['op2_21']
shapes['op3_21Type1'] = shapes['op3_21']
shapes['op2Imm8_SHA1RNDS4'] = shapes['op2Imm8']

def num_types(shape):
  '''
  number of arg_types a signature of this shape needs, including the result
  '''
  return 1 + sum(len(slot.types) for slot in shape.slots)

def get_arity(shape, res_in_arg0):
  '''
  with the result going to the receiver there is no destination operand
  '''
  if shape.separate_dest and res_in_arg0:
    return shape.arity - 1
  return shape.arity

def check_shapes():
  '''
  sanity check the table, returns a list of problems
  '''
  problems = []
  for tag, shape in shapes.items():
    positions = [slot.operand for slot in shape.slots]
    types = [ty for slot in shape.slots for ty in slot.types]
    num_sources = shape.arity - 1 if shape.separate_dest else shape.arity
    if sorted(positions) != list(range(num_sources)):
      problems.append(f'{tag}: operands {positions} do not cover {num_sources} sources')
    if sorted(types) != list(range(len(types))):
      problems.append(f'{tag}: argument types {types} are not a permutation')
    if shape.slots[0].bind != BIND_REG:
      problems.append(f'{tag}: the receiver must be a register')
  return problems
