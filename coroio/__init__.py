from .errors import AlreadyConsumed as AlreadyConsumed
from .errors import Reentered as Reentered
from .errors import Released as Released
from .errors import UseAfterCompletion as UseAfterCompletion
from .generator import Generator as Generator
from .generator import generator as generator
from .handle import Handle as Handle
from .sleep import sleep as sleep
from .state import Status as Status
from .suspension import Resumption as Resumption
from .suspension import Suspension as Suspension
from .task import Task as Task
from .task import task as task
