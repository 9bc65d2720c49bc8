from simdmapper.constants import FEATURE_NAMESPACE

def emit_call(state):
  dest, recv, args = state.ops[-1], state.ops[0], state.ops[1:-1]
  mask = ''
  if state.mask_reg is not None:
    mask = f'.Masked({state.mask_reg})'
  return f'{dest} = {recv}.{state.name}({", ".join(args)}){mask}'

def emit(state):
  '''
  render a bound candidate as a feature guarded Go statement,
  or '' if it didn't bind
  '''
  if not state.ok or not state.cpu_feature:
    return ''
  return f'''if {FEATURE_NAMESPACE}.{state.cpu_feature}() {{
\t{emit_call(state)} // {", ".join(state.notes)}
}}'''
