import re
import ply.lex as lex

from simdmapper.description import Operand, Instruction, REG, MEM, IMM
from simdmapper.errors import IllegalInputError

tokens = ['IMMEDIATE', 'MEMORY', 'REGISTER']

# [disp](base)[(index)]
address_re = re.compile(r'(?P<disp>[-+]?\d+)?\((?P<base>\w+)\)(?:\((?P<index>\w+)\))?')

t_ignore = ' \t\r\n\f\v'

# function rules are tried in definition order,
# so anything with a parenthesis is an address

def t_IMMEDIATE(t):
  r'\$\S*'
  return t

def t_MEMORY(t):
  r'[^\s(]*\(\S*'
  return t

def t_REGISTER(t):
  r'\S+'
  return t

def t_error(t):
  if t.value[0].isspace():
    t.lexer.skip(1)
    return
  raise IllegalInputError(t.lexer.lexdata, f'unexpected character {t.value[0]!r}')

lexer = lex.lex()

def parse_address(text, token):
  '''
  8(BX)(CX) -> BX+CX+8
  '''
  m = address_re.fullmatch(token)
  if m is None:
    raise IllegalInputError(text, f'bad address {token!r}')
  addr = m.group('base')
  if m.group('index') is not None:
    addr += '+' + m.group('index')
  disp = m.group('disp')
  if disp is not None:
    if disp[0] not in '+-':
      disp = '+' + disp
    addr += disp
  return addr

def to_operand(text, tok):
  # only whitespace separates operands, commas at either end are dropped
  if tok.type == 'IMMEDIATE':
    return Operand(IMM, tok.value[1:].strip(','))
  value = tok.value.strip(',')
  if tok.type == 'MEMORY':
    return Operand(MEM, parse_address(text, value))
  return Operand(REG, value)

def lex_tokens(text):
  # the shared lexer keeps its input around, every caller gets its own clone
  l = lexer.clone()
  l.input(text)
  return list(iter(l.token, None))

def tokenize(text):
  '''
  split an instruction into its mnemonic and typed operands.

  raises IllegalInputError for an empty line or a malformed address.
  '''
  toks = lex_tokens(text)
  if len(toks) == 0:
    raise IllegalInputError(text, 'empty instruction')
  mnemonic, *operands = toks
  return Instruction(
      mnemonic=mnemonic.value,
      operands=tuple(to_operand(text, tok) for tok in operands))

if __name__ == '__main__':
  import sys
  for line in sys.stdin:
    print(tokenize(line))
