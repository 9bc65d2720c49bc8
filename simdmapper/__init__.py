from simdmapper.constants import ILLEGAL_INPUT_MESSAGE, NO_MAPPING_MESSAGE
from simdmapper.description import Operand, Instruction, Signature
from simdmapper.errors import SimdMapperError, IllegalInputError, RegistryError
from simdmapper.lex import tokenize
from simdmapper.mapper import map_instruction, map_lines
from simdmapper.registry import Registry, load_registry, default_registry

__version__ = '0.1.0'
