# Standard imports
import numpy as np
from scipy.special import sici

# Project imports
from . import concentration as conc
from .errors import UnknownSelectorError

# Parameters
profile_names = ['NFW', 'isothermal', 'delta']

### Halo profiles in Fourier space ###


def Uk_NFW(cosmo, c: float, M: float, k: float, a: float, Dv=None) -> float:
    '''
    Analytic Fourier transform of an NFW profile truncated at the halo radius,
    from Cooray & Sheth (2002; Section 3 of https://arxiv.org/abs/astro-ph/0206508)
    Normalised such that U(k=0) = 1
    Args:
        cosmo: Cosmology
        c: Halo concentration
        M: Halo mass [Msun]
        k: Comoving wavenumber [Mpc^-1]
        a: Scale factor
        Dv: Halo overdensity definition; virial if None
    '''
    # Special case to prevent 0/0 at k=0, the result is unity because of the normalisation
    if k == 0.:
        return 1.
    if Dv is None:
        Dv = cosmo.virial_overdensity(a)
    rv = cosmo.virial_radius(M, a, Dv)
    rs = rv/c
    ks = k*rs
    kv = c*ks
    Sisv, Cisv = sici(ks+kv)
    Sis, Cis = sici(ks)
    f1 = np.cos(ks)*(Cisv-Cis)
    f2 = np.sin(ks)*(Sisv-Sis)
    f3 = np.sin(kv)/(ks+kv)
    f4 = _NFW_factor(c)
    return (f1+f2-f3)/f4


def _NFW_factor(c: float) -> float:
    '''
    Factor from normalisation that always appears in NFW equations
    '''
    return np.log(1.+c)-c/(1.+c)


def Uk_isothermal(cosmo, M: float, k: float, a: float, Dv=None) -> float:
    '''
    Normalised Fourier transform for an isothermal profile
    '''
    if k == 0.:
        return 1.
    if Dv is None:
        Dv = cosmo.virial_overdensity(a)
    kv = k*cosmo.virial_radius(M, a, Dv)
    Si, _ = sici(kv)
    return Si/kv


def check_profile(profile: str):
    '''
    Raise UnknownSelectorError if 'profile' is not a recognised halo profile
    '''
    if profile not in profile_names:
        raise UnknownSelectorError('window_function', 'Halo profile not recognised: %s' % (profile))


def profile_Fourier(cosmo, M: float, k: float, a: float, Dv: float,
                    concentration='Duffy et al. (2008)', profile='NFW') -> float:
    '''
    Normalised Fourier transform of the halo profile, U(k, M) with U(k->0, M) = 1
    Args:
        cosmo: Cosmology
        M: Halo mass [Msun]
        k: Comoving wavenumber [Mpc^-1]
        a: Scale factor
        Dv: Halo overdensity definition
        concentration: Name of concentration-mass relation (NFW only)
        profile: Profile name:
            'delta': delta function concentrated at halo centre
            'isothermal': 1/r^2
            'NFW': Navarro, Frenk & White (1997)
    '''
    check_profile(profile)
    if profile == 'NFW':
        c = conc.concentration(cosmo, M, a, Dv, method=concentration)
        return Uk_NFW(cosmo, c, M, k, a, Dv=Dv)
    elif profile == 'isothermal':
        return Uk_isothermal(cosmo, M, k, a, Dv=Dv)
    else:
        return 1.


def window_function(cosmo, M: float, k: float, a: float, Dv: float,
                    concentration='Duffy et al. (2008)', profile='NFW') -> float:
    '''
    Halo window function for the matter field, W(k, M) = M U(k, M)/rho_m [Mpc^3]
    U is normalised so multiplying by M/rho_m turns units to overdensity
    Args:
        cosmo: Cosmology
        M: Halo mass [Msun]
        k: Comoving wavenumber [Mpc^-1]
        a: Scale factor
        Dv: Halo overdensity definition
        concentration: Name of concentration-mass relation (NFW only)
        profile: Profile name (see profile_Fourier)
    '''
    rhom = cosmo.mean_matter_density(a)
    return M*profile_Fourier(cosmo, M, k, a, Dv, concentration=concentration, profile=profile)/rhom

### ###
