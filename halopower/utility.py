# Standard imports
import numpy as np
from scipy.integrate import quad

# Project imports
from .errors import IntegrationError


def logspace(xmin:float, xmax:float, nx:int) -> np.ndarray:
    '''
    Return a logarithmically spaced range of numbers
    '''
    return np.logspace(np.log10(xmin), np.log10(xmax), nx)


def integrate_log10_mass(f:callable, Mmin:float, Mmax:float, epsabs:float, epsrel:float, limit:int,
                         component='integral') -> float:
    '''
    Adaptive (QUADPACK) integration of f(log10(M)) between log10(Mmin) and log10(Mmax)
    Raises IntegrationError if the integration does not converge within 'limit' subdivisions
    or if the result is not finite; never returns a partial result
    Args:
        f: Integrand, a function of log10 halo mass only
        Mmin: Minimum halo mass [Msun]
        Mmax: Maximum halo mass [Msun]
        epsabs: Absolute tolerance
        epsrel: Relative tolerance
        limit: Maximum number of subintervals
        component: Name used to identify the calculation in error messages
    '''
    log10Mmin, log10Mmax = np.log10(Mmin), np.log10(Mmax)
    result = quad(f, log10Mmin, log10Mmax, epsabs=epsabs, epsrel=epsrel, limit=limit, full_output=1)
    if len(result) > 3: # QUADPACK appends a message if ier > 0
        raise IntegrationError(component, 'Integration failure (%s)' % (result[3]))
    integral = result[0]
    if not np.isfinite(integral):
        raise IntegrationError(component, 'Integration failure (non-finite result: %s)' % (integral))
    return integral
