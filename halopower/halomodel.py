# Standard imports
import numpy as np
import warnings

# Project imports
from . import utility as util
from . import concentration as conc
from . import profiles
from . import massfunction
from .errors import HaloModelError

# Parameters
Mmin_default = 1e7  # Lower limit of halo-mass integration [Msun]
Mmax_default = 1e17 # Upper limit of halo-mass integration [Msun]
epsabs = 0.         # Absolute tolerance of halo-mass integration
epsrel = 1e-4       # Relative tolerance of halo-mass integration
limit = 1000        # Maximum number of subintervals in halo-mass integration

### Class definition ###


class model():
    '''
    Class for the halo model of the matter power spectrum with NFW haloes
    '''

    def __init__(self, cosmo, mass_function='Tinker et al. (2010)', concentration='Duffy et al. (2008)',
                 profile='NFW', Dv='virial', Mmin=Mmin_default, Mmax=Mmax_default,
                 epsabs=epsabs, epsrel=epsrel, limit=limit, verbose=False):
        '''
        Class initialisation; configures the halo ingredients and the mass integration.
        Args:
            cosmo: Cosmology
            mass_function: Name of mass function (see massfunction.mass_function), or an object
                with dndlog10M(cosmo, M, a, Dv) and linear_bias(cosmo, M, a, Dv) methods
            concentration: Name of concentration-mass relation (see concentration.concentration)
            profile: Name of halo profile (see profiles.profile_Fourier)
            Dv: Halo overdensity definition relative to the mean matter density, either
                'virial' for Bryan & Norman (1998) or a number (e.g., 200.)
            Mmin: Minimum halo mass in integrals [Msun]
            Mmax: Maximum halo mass in integrals [Msun]
            epsabs: Absolute tolerance for integration
            epsrel: Relative tolerance for integration
            limit: Maximum number of subintervals for integration
            verbose: Verbosity
        '''
        # Checks
        if not (0. < Mmin < Mmax):
            raise ValueError('Halo mass range must satisfy 0 < Mmin < Mmax')
        if Mmin < cosmo.Mmin_sigma or Mmax > cosmo.Mmax_sigma:
            raise ValueError('Halo mass range must lie within the sigma(M) table: %1.1e %1.1e [Msun]'
                             % (cosmo.Mmin_sigma, cosmo.Mmax_sigma))
        if Dv != 'virial' and (isinstance(Dv, str) or not Dv > 0.):
            raise ValueError('Halo overdensity must be virial or a positive number')
        profiles.check_profile(profile)
        if profile == 'NFW':
            conc.check_method(concentration)

        # Store internal variables
        self.cosmo = cosmo
        if isinstance(mass_function, str):
            mass_function = massfunction.mass_function(mass_function, verbose=verbose)
        self.hmf = mass_function
        self.concentration = concentration
        self.profile = profile
        self.Dv_definition = Dv
        self.Mmin, self.Mmax = Mmin, Mmax
        self.epsabs, self.epsrel, self.limit = epsabs, epsrel, limit
        self.verbose = verbose

        # Write to screen
        if verbose:
            print('Initialising halo model')
            print('Halo profile:', self.profile)
            if self.profile == 'NFW':
                print('Concentration-mass relation:', self.concentration)
            print('Halo definition:', self.Dv_definition)
            print('Halo mass range [log10(Msun)]: %1.3f %1.3f' % (np.log10(self.Mmin), np.log10(self.Mmax)))
            print('Integration tolerance (abs, rel): %1.1e %1.1e' % (self.epsabs, self.epsrel))
            print()

    def Dv(self, a: float) -> float:
        '''
        Halo overdensity at scale factor a, shared by profiles, mass function and bias
        '''
        if self.Dv_definition == 'virial':
            return self.cosmo.virial_overdensity(a)
        return self.Dv_definition

    def window_function(self, M: float, k: float, a: float, Dv: float) -> float:
        '''
        Window function W(k, M) = M U(k, M)/rho_m [Mpc^3]
        '''
        return profiles.window_function(self.cosmo, M, k, a, Dv,
                                        concentration=self.concentration, profile=self.profile)

    def _I_1h(self, k: float, a: float) -> float:
        '''
        Evaluate the integral that appears in the one-halo term
        The mass function is per log10(M) so no ln(10) factor appears here
        '''
        Dv = self.Dv(a)

        def integrand(log10M):
            M = 10**log10M
            Wk = self.window_function(M, k, a, Dv)
            dn_dlog10M = self.hmf.dndlog10M(self.cosmo, M, a, Dv)
            return dn_dlog10M*Wk**2

        return util.integrate_log10_mass(integrand, self.Mmin, self.Mmax, self.epsabs, self.epsrel, self.limit,
                                         component='one_halo_integral')

    def _I_2h(self, k: float, a: float) -> float:
        '''
        Evaluate the bias-weighted integral that appears in the two-halo term
        '''
        Dv = self.Dv(a)

        def integrand(log10M):
            M = 10**log10M
            Wk = self.window_function(M, k, a, Dv)
            dn_dlog10M = self.hmf.dndlog10M(self.cosmo, M, a, Dv)
            b = self.hmf.linear_bias(self.cosmo, M, a, Dv)
            return b*dn_dlog10M*Wk

        return util.integrate_log10_mass(integrand, self.Mmin, self.Mmax, self.epsabs, self.epsrel, self.limit,
                                         component='two_halo_integral')

    def _check_arguments(self, k: float, a: float):
        if k < 0.:
            raise ValueError('Wavenumber must be non-negative')
        if not (0. < a <= 1.):
            raise ValueError('Scale factor must be in the range (0, 1]')

    def power_1h(self, k: float, a: float) -> float:
        '''
        One-halo term of the matter power spectrum [Mpc^3]
        Args:
            k: Comoving wavenumber [Mpc^-1]
            a: Scale factor
        '''
        self._check_arguments(k, a)
        return self._I_1h(k, a)

    def power_2h(self, k: float, a: float) -> float:
        '''
        Two-halo term of the matter power spectrum [Mpc^3]
        The missing halo-bias-mass below Mmin is added as if it were all in haloes of mass Mmin
        Args:
            k: Comoving wavenumber [Mpc^-1]
            a: Scale factor
        '''
        self._check_arguments(k, a)
        I_2h = self._I_2h(k, a)

        # Calculate the missing halo-bias from the low-mass part of the integral
        A = 1.-self._I_2h(0., a)
        if self.verbose:
            print('Missing halo-bias-mass from the low-mass end of the two-halo integrand:', A)
        if A < 0.:
            warnings.warn('Warning: Mass function/bias correction is negative!', RuntimeWarning)

        # ...multiplied by the ratio of window functions at the lowest halo mass
        Dv = self.Dv(a)
        W1 = self.window_function(self.Mmin, k, a, Dv)
        W2 = self.window_function(self.Mmin, 0., a, Dv)
        I_2h = I_2h+A*W1/W2

        return self.cosmo.linear_power(k, a)*I_2h**2

    def power(self, k: float, a: float) -> float:
        '''
        Halo-model matter power spectrum, the sum of the two- and one-halo terms [Mpc^3]
        Args:
            k: Comoving wavenumber [Mpc^-1]
            a: Scale factor
        '''
        Pk_2h = self.power_2h(k, a)
        Pk_1h = self.power_1h(k, a)
        return Pk_2h+Pk_1h

### ###

### Functions ###


def onehalo_matter_power(cosmo, k: float, a: float, **kwargs) -> float:
    '''
    One-halo term of the matter power spectrum [Mpc^3] assuming NFW haloes
    Args:
        cosmo: Cosmology
        k: Comoving wavenumber [Mpc^-1]
        a: Scale factor
        **kwargs: Passed to model
    '''
    return model(cosmo, **kwargs).power_1h(k, a)


def twohalo_matter_power(cosmo, k: float, a: float, **kwargs) -> float:
    '''
    Two-halo term of the matter power spectrum [Mpc^3] assuming NFW haloes
    Args:
        cosmo: Cosmology
        k: Comoving wavenumber [Mpc^-1]
        a: Scale factor
        **kwargs: Passed to model
    '''
    return model(cosmo, **kwargs).power_2h(k, a)


def halomodel_matter_power(cosmo, k: float, a: float, **kwargs) -> float:
    '''
    Halo-model matter power spectrum [Mpc^3] by summing the two- and one-halo terms
    Args:
        cosmo: Cosmology
        k: Comoving wavenumber [Mpc^-1]
        a: Scale factor
        **kwargs: Passed to model
    '''
    return model(cosmo, **kwargs).power(k, a)


def power_with_status(func: callable, *args, **kwargs) -> tuple:
    '''
    Call one of the power-spectrum functions and return (value, error) rather than raising
    On success error is None; on failure value is NaN and error is the HaloModelError raised
    Args:
        func: Function to call (e.g., halomodel_matter_power)
        *args: Passed to func
        **kwargs: Passed to func
    '''
    try:
        return func(*args, **kwargs), None
    except HaloModelError as error:
        return np.nan, error

### ###
