import importlib.metadata

from vectfit.exceptions import *
from vectfit.poles import PoleIndex, PoleRole, classify_poles
from vectfit.residues import evaluate
from vectfit.fitting import vectfit
from .config import *


__version__ = importlib.metadata.version("vectfit")
