# Classes
from .halomodel import model
from .cosmology import Cosmology
from .massfunction import mass_function

# Functions
from .halomodel import onehalo_matter_power
from .halomodel import twohalo_matter_power
from .halomodel import halomodel_matter_power
from .halomodel import power_with_status
from .concentration import concentration
from .profiles import Uk_NFW
from .profiles import window_function

# Errors
from .errors import HaloModelError
from .errors import ModelMismatchError
from .errors import UnknownSelectorError
from .errors import IntegrationError
