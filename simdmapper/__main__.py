'''
Map Go assembly vector instructions to archsimd calls.

  simdmapper VPADDD X2, X9, X2
  simdmapper --file kernel.s
'''
import argparse
import logging
import sys

from tqdm import tqdm

from simdmapper.constants import registry_path_from_env
from simdmapper.errors import RegistryError
from simdmapper.mapper import map_instruction, is_comment
from simdmapper.registry import load_registry

def parse_args(argv=None):
  parser = argparse.ArgumentParser(
      prog='simdmapper',
      description='Map a Go assembly vector instruction to archsimd intrinsics.')
  parser.add_argument('asm', nargs='*',
      help='the instruction, e.g. VPADDD X2, X9, X2')
  parser.add_argument('-f', '--file',
      help='map every line of this file instead ("-" for stdin)')
  parser.add_argument('--registry', default=None,
      help='rule dataset to use instead of the bundled one')
  parser.add_argument('-v', '--verbose', action='store_true',
      help='log why candidates were skipped')
  args = parser.parse_args(argv)
  if (args.file is None) == (len(args.asm) == 0):
    parser.error('give either an instruction or --file')
  return args

def map_file(f, registry, outf):
  lines = f.readlines()
  # the bar goes away when stderr is not a terminal
  pbar = tqdm(lines, disable=None)
  for line in pbar:
    if is_comment(line):
      continue
    line = line.strip()
    pbar.set_description('mapping ' + line.split()[0])
    outf.write(f'// {line}\n{map_instruction(line, registry)}\n\n')

def main(argv=None):
  args = parse_args(argv)
  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.WARNING,
      format='%(levelname)s %(name)s: %(message)s')

  try:
    registry = load_registry(args.registry or registry_path_from_env())
  except RegistryError as e:
    print(f'simdmapper: {e}', file=sys.stderr)
    return 1

  if args.file is None:
    print(map_instruction(' '.join(args.asm), registry))
  elif args.file == '-':
    map_file(sys.stdin, registry, sys.stdout)
  else:
    try:
      f = open(args.file)
    except OSError as e:
      print(f'simdmapper: {e}', file=sys.stderr)
      return 1
    with f:
      map_file(f, registry, sys.stdout)
  return 0

if __name__ == '__main__':
  sys.exit(main())
