from collections import namedtuple
from dataclasses import dataclass
from typing import Optional, Tuple

REG = 'Reg'
MEM = 'Mem'
IMM = 'Imm'

# kind is one of REG, MEM and IMM.
# name is the register name, the address expression or the immediate text.
Operand = namedtuple('Operand', ['kind', 'name'])
Instruction = namedtuple('Instruction', ['mnemonic', 'operands'])

@dataclass(frozen=True)
class Signature:
  name: str # the archsimd method
  shape: str
  arg_types: Tuple[str, ...] # the last one is the result type
  cpu_feature: str
  const_imm: Optional[str] = None # operand 0 must be this immediate
  res_in_arg0: bool = False # the destination is the receiver, not the last operand

  @property
  def result_type(self):
    return self.arg_types[-1]
