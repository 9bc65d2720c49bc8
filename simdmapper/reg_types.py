# width class of each archsimd vector type,
# matched against the first letter of a register name
reg_classes = {
    'Int8x16': 'X',
    'Uint8x16': 'X',
    'Int16x8': 'X',
    'Uint16x8': 'X',
    'Int32x4': 'X',
    'Uint32x4': 'X',
    'Int64x2': 'X',
    'Uint64x2': 'X',
    'Float32x4': 'X',
    'Float64x2': 'X',

    'Int8x32': 'Y',
    'Uint8x32': 'Y',
    'Int16x16': 'Y',
    'Uint16x16': 'Y',
    'Int32x8': 'Y',
    'Uint32x8': 'Y',
    'Int64x4': 'Y',
    'Uint64x4': 'Y',
    'Float32x8': 'Y',
    'Float64x4': 'Y',

    'Int8x64': 'Z',
    'Uint8x64': 'Z',
    'Int16x32': 'Z',
    'Uint16x32': 'Z',
    'Int32x16': 'Z',
    'Uint32x16': 'Z',
    'Int64x8': 'Z',
    'Uint64x8': 'Z',
    'Float32x16': 'Z',
    'Float64x8': 'Z',
    }

width_classes = frozenset(reg_classes.values())

IMM8_TYPE = 'uint8'

def is_vector_type(typename):
  return typename in reg_classes

def has_width_class(reg_name):
  return reg_name[:1] in width_classes

def fits_reg(reg_name, typename):
  '''
  general purpose registers fit any type,
  vector registers only fit types of their own width
  '''
  if not has_width_class(reg_name):
    return True
  return reg_name[0] == reg_classes.get(typename)

def mask_type(typename):
  '''
  Float64x8 -> Mask64x8
  '''
  for elem in ('Float', 'Uint', 'Int'):
    typename = typename.replace(elem, 'Mask')
  return typename
