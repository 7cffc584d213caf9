from .objects import *
from .git import *
