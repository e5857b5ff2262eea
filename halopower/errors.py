class HaloModelError(Exception):
    '''
    Base class for failures raised in halo-model calculations
    Args:
        component: Name of the calculation that failed
        message: Human-readable description of the condition
    '''
    def __init__(self, component: str, message: str):
        self.component = component
        self.message = message
        super().__init__('%s: %s' % (component, message))


class ModelMismatchError(HaloModelError, ValueError):
    '''
    An empirical relation was called with a halo definition it was not calibrated for
    '''
    pass


class UnknownSelectorError(HaloModelError, ValueError):
    '''
    A concentration relation, profile or mass function name was not recognised
    '''
    pass


class IntegrationError(HaloModelError, RuntimeError):
    '''
    Adaptive quadrature did not converge, or returned a non-finite value
    '''
    pass
