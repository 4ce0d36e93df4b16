from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterator, NewType

ParamHandle = NewType('ParamHandle', int)


@dataclass
class Param:
  """A free scalar variable and its current value"""
  h: ParamHandle
  val: float = 0.0


class ParameterStore(ABC):
  """Lookup interface the evaluator uses to resolve parameter handles"""

  @abstractmethod
  def lookup(self, handle: ParamHandle) -> float:
    pass

  @abstractmethod
  def resolve_direct(self, handle: ParamHandle) -> Param:
    pass


class ParamTable(ParameterStore):
  """Dict-backed parameter store; handles are allocated sequentially from 1"""

  def __init__(self):
    self._params: Dict[ParamHandle, Param] = {}
    self._next_handle = 1

  def add(self, val: float = 0.0) -> ParamHandle:
    handle = ParamHandle(self._next_handle)
    self._next_handle += 1
    self._params[handle] = Param(handle, float(val))
    return handle

  def get(self, handle: ParamHandle) -> Param:
    return self._params[handle]

  def set(self, handle: ParamHandle, val: float):
    self._params[handle].val = float(val)

  def lookup(self, handle: ParamHandle) -> float:
    return self._params[handle].val

  def resolve_direct(self, handle: ParamHandle) -> Param:
    return self._params[handle]

  def handles(self) -> Iterator[ParamHandle]:
    return iter(self._params)

  def __len__(self) -> int:
    return len(self._params)

  def __contains__(self, handle) -> bool:
    return handle in self._params
