class SimdMapperError(Exception):
  pass

class IllegalInputError(SimdMapperError):
  '''
  the instruction text can't be tokenized
  '''
  def __init__(self, text, reason):
    super().__init__(f'{reason}: {text!r}')
    self.text = text
    self.reason = reason

class RegistryError(SimdMapperError):
  '''
  the rule dataset is malformed
  '''
  pass
