# Standard imports
import numpy as np
from functools import lru_cache
from scipy.integrate import quad
from scipy.interpolate import CubicSpline

# Project imports
from . import constants as const
from . import utility as util

# Constants
Dv0 = 18.*np.pi**2  # Delta_v = ~178, EdS halo virial overdensity

# Parameters
xmin_Tk = 1e-5  # Scale at which to switch to Taylor expansion approximation in tophat Fourier functions
kmin_sigma, kmax_sigma = 1e-5, 1e5 # Wavenumber range for sigma(R) integration [Mpc^-1]
nk_sigma = int(1e5)                # Number of wavenumbers for sigma(R) integration
Mmin_sigma, Mmax_sigma = 1e3, 1e19 # Halo mass range for sigma(M) table [Msun]
nM_sigma = 321                     # Number of masses in sigma(M) table
eps_growth = 1e-6                  # Relative accuracy of the growth-factor integral

### Background ###


def comoving_matter_density(Om_m: float, h: float) -> float:
    '''
    Comoving matter density, not a function of time [Msun Mpc^-3]
    args:
        Om_m: Cosmological matter density (at z=0)
        h: Dimensionless Hubble parameter
    '''
    return const.rho_critical*Om_m*h**2


def _H2(a: float, Om_m: float, Om_k: float, Om_v: float) -> float:
    return Om_m*a**-3+Om_k*a**-2+Om_v


@lru_cache(maxsize=1024)
def _growth_unnormalised(a: float, Om_m: float, Om_k: float, Om_v: float) -> float:
    '''
    Unnormalised LCDM growth factor, g(a) = 5/2 Om_m H(a) int_0^a da'/[a'H(a')]^3
    Cached on the density parameters so that Cosmology instances share results
    '''
    integral, _ = quad(lambda x: (x**2*_H2(x, Om_m, Om_k, Om_v))**-1.5, 0., a, epsabs=0., epsrel=eps_growth)
    return 2.5*Om_m*np.sqrt(_H2(a, Om_m, Om_k, Om_v))*integral

### ###

### Linear perturbations ###


def _Tophat_k(x: np.ndarray) -> np.ndarray:
    '''
    Fourier transform of a tophat function.
    args:
        x: Usually kR
    '''
    xmin = xmin_Tk
    return np.where(np.abs(x) < xmin, 1.-x**2/10., (3./x**3)*(np.sin(x)-x*np.cos(x)))


def Tk_EH_nowiggle(k: np.ndarray, Om_m: float, Om_b: float, h: float) -> np.ndarray:
    '''
    Eisenstein & Hu (1998; https://arxiv.org/abs/astro-ph/9709112) no-wiggle transfer function
    with the Sugiyama (1995) shape parameter; normalised so that T(k->0) = 1
    args:
        k: Wavenumber [Mpc^-1]
        Om_m: Cosmological matter density
        Om_b: Cosmological baryon density
        h: Dimensionless Hubble parameter
    '''
    Gamma = Om_m*h*np.exp(-Om_b*(1.+np.sqrt(2.*h)/Om_m))
    q = (k/h)/Gamma
    L = np.log(2.*np.e+1.8*q)
    C = 14.2+731./(1.+62.5*q)
    return L/(L+C*q**2)


def sigmaR(Rs: np.ndarray, Pk_lin: callable, kmin=kmin_sigma, kmax=kmax_sigma, nk=nk_sigma) -> np.ndarray:
    '''
    Get the square-root of the variance, sigma(R), in the density field
    at comoving Lagrangian scale R
    Brute force integration, this is only slightly faster than using a loop
    args:
        R: Comoving Lagrangian radius [Mpc]
        Pk_lin: Function of k to evaluate the linear power spectrum
        kmin: Minimum wavenumber [Mpc^-1]
        kmax: Maximum wavenumber [Mpc^-1]
        nk: Number of bins in wavenumber
    '''
    k = util.logspace(kmin, kmax, nk)
    dlnk = np.log(k[1]/k[0])
    Pk = Pk_lin(k)

    def sigmaR_vec(R):
        integrand = Pk*(k**3)*_Tophat_k(k*R)**2
        return np.sqrt(np.sum(dlnk*integrand)/(2.*np.pi**2))
    sigma_func = np.vectorize(sigmaR_vec)
    return sigma_func(Rs)

### ###

### Haloes ###


def Lagrangian_radius(M: float, rhom: float) -> float:
    '''
    Radius [Mpc] of a sphere containing mass M in a homogeneous universe
    args:
        M: Halo mass [Msun]
        rhom: Comoving matter density [Msun Mpc^-3]
    '''
    return np.cbrt(3.*M/(4.*np.pi*rhom))


def mass(R: float, rhom: float) -> float:
    '''
    Mass [Msun] contained within a sphere of radius 'R' [Mpc] in a homogeneous universe
    '''
    return (4./3.)*np.pi*R**3*rhom

### ###

### Spherical collapse ###


def Dv_BryanNorman(Om_mz: float) -> float:
    '''
    LCDM fitting function for virial overdensity from Bryan & Norman
    (1998; https://arxiv.org/abs/astro-ph/9710107)
    Note that here Dv is defined relative to background matter density,
    whereas in paper it is relative to critical density
    For Omega_m = 0.3 LCDM Dv ~ 330.
    '''
    x = Om_mz-1.
    Dv = Dv0+82.*x-39.*x**2
    return Dv/Om_mz

### ###

### Class definition ###


class Cosmology():
    '''
    Class for a LCDM cosmology (w = -1, optionally curved) with a tabulated sigma(M)
    '''

    def __init__(self, Omega_c: float, Omega_b: float, h: float, ns: float, sigma_8: float,
                 Omega_k=0., Pk_lin=None, verbose=False):
        '''
        Class initialisation; computes growth normalisation and tabulates sigma(M).
        Args:
            Omega_c: Cold dark matter density
            Omega_b: Baryon density
            h: Dimensionless Hubble parameter
            ns: Spectral index of primordial fluctuations
            sigma_8: Normalisation of the linear power spectrum at z=0 (ignored if Pk_lin is given)
            Omega_k: Curvature density
            Pk_lin(k): Optional z=0 linear power spectrum [Mpc^3] as a function of k [Mpc^-1];
                if None then an Eisenstein & Hu (1998) no-wiggle spectrum normalised to sigma_8 is used
            verbose: Verbosity
        '''
        if Omega_c+Omega_b <= 0.:
            raise ValueError('Matter density must be positive')
        if h <= 0.:
            raise ValueError('Hubble parameter must be positive')

        # Store internal variables
        self.Omega_c = Omega_c
        self.Omega_b = Omega_b
        self.Omega_m = Omega_c+Omega_b
        self.Omega_k = Omega_k
        self.Omega_v = 1.-self.Omega_m-Omega_k
        self.h = h
        self.ns = ns
        self.rhom = comoving_matter_density(self.Omega_m, h)

        # Linear power spectrum at z=0
        R_8 = 8./h # 8 Mpc/h [Mpc]
        if Pk_lin is None:
            self._Pk_amplitude = 1.
            self._Pk_amplitude = (sigma_8/sigmaR(R_8, self._Pk_EH))**2
            self._Pk_0 = self._Pk_EH
        else:
            self._Pk_0 = Pk_lin
        self.sigma_8 = float(sigmaR(R_8, self._Pk_0))

        # Tabulate sigma(M) at z=0, halo masses outside this range are not supported
        self.Mmin_sigma, self.Mmax_sigma = Mmin_sigma, Mmax_sigma
        Ms = util.logspace(self.Mmin_sigma, self.Mmax_sigma, nM_sigma)
        sigmas = sigmaR(Lagrangian_radius(Ms, self.rhom), self._Pk_0)
        self._lnsigma = CubicSpline(np.log(Ms), np.log(sigmas))
        self._dlnsigma = self._lnsigma.derivative()

        # Write to screen
        if verbose:
            print('Initialising cosmology')
            print('Omega_m: %1.3f' % (self.Omega_m))
            print('Omega_b: %1.3f' % (self.Omega_b))
            print('Omega_v: %1.3f' % (self.Omega_v))
            print('h: %1.3f' % (self.h))
            print('n_s: %1.3f' % (self.ns))
            print('sigma_8: %1.4f' % (self.sigma_8))
            print('Comoving matter density [log10(Msun/Mpc^3)]: %1.4f' % (np.log10(self.rhom)))
            print()

    @classmethod
    def from_camb(cls, Omega_c: float, Omega_b: float, h: float, ns: float, sigma_8: float,
                  Omega_k=0., m_nu=0., verbose=False, **kwargs):
        '''
        Alternative class initialisation with the z=0 linear power spectrum taken from CAMB
        Args:
            Omega_c: Cold dark matter density
            Omega_b: Baryon density
            h: Dimensionless Hubble parameter
            ns: Spectral index of primordial fluctuations
            sigma_8: Normalisation of the linear power spectrum at z=0
            Omega_k: Curvature density
            m_nu: Neutrino mass [eV]
            **kwargs: Passed to camb_stuff.linear_power
        '''
        from . import camb_stuff
        Pk_lin, _ = camb_stuff.linear_power(Omega_c, Omega_b, h, ns, sigma_8, Omega_k=Omega_k,
                                            m_nu=m_nu, verbose=verbose, **kwargs)
        return cls(Omega_c, Omega_b, h, ns, sigma_8, Omega_k=Omega_k, Pk_lin=Pk_lin, verbose=verbose)

    def __str__(self):
        print('Omega_m: %1.3f' % (self.Omega_m))
        print('Omega_b: %1.3f' % (self.Omega_b))
        print('Omega_k: %1.3f' % (self.Omega_k))
        print('h: %1.3f' % (self.h))
        print('n_s: %1.3f' % (self.ns))
        print('sigma_8: %1.4f' % (self.sigma_8))
        return ''

    def _Pk_EH(self, k: np.ndarray) -> np.ndarray:
        Tk = Tk_EH_nowiggle(k, self.Omega_m, self.Omega_b, self.h)
        return self._Pk_amplitude*k**self.ns*Tk**2

    def H2(self, a: float) -> float:
        '''
        Squared Hubble function, H^2(a)/H0^2
        '''
        return _H2(a, self.Omega_m, self.Omega_k, self.Omega_v)

    def Omega_m_a(self, a: float) -> float:
        '''
        Matter density relative to critical at scale factor a
        '''
        return self.Omega_m*a**-3/self.H2(a)

    def growth_factor(self, a: float) -> float:
        '''
        Linear growth factor for LCDM, normalised so that g(a=1) = 1
        Integral solution g(a) ~ H(a) int_0^a da'/[a'H(a')]^3 (Heath 1977)
        '''
        if a <= 0.:
            raise ValueError('Scale factor must be positive')
        g = _growth_unnormalised(a, self.Omega_m, self.Omega_k, self.Omega_v)
        g0 = _growth_unnormalised(1., self.Omega_m, self.Omega_k, self.Omega_v)
        return g/g0

    def linear_power(self, k: float, a: float) -> float:
        '''
        Linear matter power spectrum [Mpc^3]
        Args:
            k: Comoving wavenumber [Mpc^-1]
            a: Scale factor
        '''
        return self._Pk_0(k)*self.growth_factor(a)**2

    def sigmaM(self, M: float, a: float) -> float:
        '''
        Root-variance of the linear density field smoothed on the Lagrangian scale of mass M
        Args:
            M: Halo mass [Msun]
            a: Scale factor
        '''
        return np.exp(self._lnsigma(np.log(M)))*self.growth_factor(a)

    def dlnsigma_dlnM(self, M: float) -> float:
        '''
        Logarithmic derivative of sigma(M), independent of time in LCDM
        '''
        return self._dlnsigma(np.log(M))

    def virial_overdensity(self, a: float) -> float:
        '''
        Bryan & Norman (1998) virial overdensity relative to the mean matter density
        '''
        return Dv_BryanNorman(self.Omega_m_a(a))

    def virial_radius(self, M: float, a: float, Dv: float) -> float:
        '''
        Comoving halo radius [Mpc] enclosing mean overdensity Dv relative to the matter density
        Args:
            M: Halo mass [Msun]
            a: Scale factor
            Dv: Halo overdensity definition
        '''
        return Lagrangian_radius(M, self.mean_matter_density(a))/np.cbrt(Dv)

    def mean_matter_density(self, a: float) -> float:
        '''
        Comoving mean matter density [Msun Mpc^-3]; the same at all scale factors
        '''
        return self.rhom

### ###
