# Standard imports
import numpy as np
from scipy.interpolate import interp1d as interp
from functools import lru_cache

# Project imports
from .errors import UnknownSelectorError

# Parameters
# Get the bias from the peak-background split, rather than using the calibrated formula
Tinker_PBS = False
names = ['Press & Schecter (1974)', 'Sheth & Tormen (1999)', 'Tinker et al. (2010)']

### Class definition ###


class mass_function():
    '''
    Class for the halo mass function and linear halo bias
    '''

    def __init__(self, name='Tinker et al. (2010)', dc=1.686, verbose=False):
        '''
        Class initialisation; configures mass function and halo bias.
        Args:
            name: Name of mass function, one of:
                'Press & Schecter (1974)'
                'Sheth & Tormen (1999)'
                'Tinker et al. (2010)'
            dc: Halo linear collapse threshold
            verbose: Verbosity
        '''
        if name not in names:
            raise UnknownSelectorError('mass_function', 'Halo mass function not recognised: %s' % (name))
        self.name = name
        self.dc = dc

        # Write to screen
        if verbose:
            print('Initialising mass function')
            print('Mass function:', self.name)
            print('delta_c: %1.4f' % (self.dc))

        if name == 'Sheth & Tormen (1999)':
            # Sheth & Tormen (1999; https://arxiv.org/abs/astro-ph/9901122)
            from scipy.special import gamma as Gamma
            p = 0.3
            q = 0.707
            self.p_ST = p
            self.q_ST = q
            self.A_ST = np.sqrt(2.*q)/(np.sqrt(np.pi)+Gamma(0.5-p)/2**p)  # A ~ 0.2161
            if verbose:
                print('p: %1.3f; q: %1.3f; A: %1.4f' % (self.p_ST, self.q_ST, self.A_ST))
        if verbose:
            print()

    def __str__(self):
        print('Mass function:', self.name)
        print('delta_c: %1.4f' % (self.dc))
        if self.name == 'Sheth & Tormen (1999)':
            print('p: %1.3f; q: %1.3f; A: %1.4f' % (self.p_ST, self.q_ST, self.A_ST))
        return ''

    def _mass_function_nu(self, nu: float, Dv: float) -> float:
        '''
        Halo mass function g(nu) with nu=delta_c/sigma(M)
        Integral of g(nu) over all nu is unity
        '''
        if self.name == 'Press & Schecter (1974)':
            return np.sqrt(2./np.pi)*np.exp(-(nu**2)/2.)
        elif self.name == 'Sheth & Tormen (1999)':
            A = self.A_ST
            q = self.q_ST
            p = self.p_ST
            return A*(1.+((q*nu**2)**(-p)))*np.exp(-q*nu**2/2.)
        else:
            alpha, beta, gamma, phi, eta = _Tinker_mass_function_parameters(Dv)
            f1 = 1.+(beta*nu)**(-2.*phi)
            f2 = nu**(2.*eta)
            f3 = np.exp(-gamma*nu**2/2.)
            return alpha*f1*f2*f3

    def _linear_bias_nu(self, nu: float, Dv: float) -> float:
        '''
        Halo linear bias b(nu) with nu=delta_c/sigma(M)
        Integral of b(nu)*g(nu) over all nu is unity
        '''
        if self.name == 'Press & Schecter (1974)':
            return 1.+(nu**2-1.)/self.dc
        elif self.name == 'Sheth & Tormen (1999)':
            p = self.p_ST
            q = self.q_ST
            return 1.+(q*(nu**2)-1.+2.*p/(1.+(q*nu**2)**p))/self.dc
        elif Tinker_PBS:
            _, beta, gamma, phi, eta = _Tinker_mass_function_parameters(Dv)
            f1 = (gamma*nu**2-(1.+2.*eta))/self.dc
            f2 = (2.*phi/self.dc)/(1.+(beta*nu)**(2.*phi))
            return 1.+f1+f2
        else:
            A, a, B, b, C, c = _Tinker_bias_parameters(Dv)
            fA = A*nu**a/(nu**a+self.dc**a)
            fB = B*nu**b
            fC = C*nu**c
            return 1.-fA+fB+fC

    def _peak_height(self, cosmo, M: float, a: float) -> float:
        '''
        Calculate peak height (nu) from halo mass
        '''
        return self.dc/cosmo.sigmaM(M, a)

    def dndlog10M(self, cosmo, M: float, a: float, Dv: float) -> float:
        '''
        Comoving number density of haloes per unit log10 halo mass [Mpc^-3]
        dn/dlog10(M) = ln(10) (rho_m/M) g(nu) dnu/dln(M)
        Args:
            cosmo: Cosmology
            M: Halo mass [Msun]
            a: Scale factor
            Dv: Halo overdensity definition
        '''
        nu = self._peak_height(cosmo, M, a)
        dnu_dlnM = -nu*cosmo.dlnsigma_dlnM(M)
        rhom = cosmo.mean_matter_density(a)
        return np.log(10.)*(rhom/M)*self._mass_function_nu(nu, Dv)*dnu_dlnM

    def linear_bias(self, cosmo, M: float, a: float, Dv: float) -> float:
        '''
        Linear halo bias as a function of halo mass
        Args:
            cosmo: Cosmology
            M: Halo mass [Msun]
            a: Scale factor
            Dv: Halo overdensity definition
        '''
        nu = self._peak_height(cosmo, M, a)
        return self._linear_bias_nu(nu, Dv)

### ###

### Tinker et al. (2010) ###


@lru_cache(maxsize=128)
def _Tinker_mass_function_parameters(Dv: float) -> tuple:
    '''
    Tinker et al. (2010; https://arxiv.org/abs/1001.3162) mass function parameters from Table 4
    A range of Delta_v are available, interpolate/extrapolate between them
    '''
    Dv_array = np.array([200., 300., 400., 600., 800., 1200., 1600, 2400., 3200.])
    logDv = np.log(Dv)
    logDv_array = np.log(Dv_array)
    alpha_array = np.array([0.368, 0.363, 0.385, 0.389, 0.393, 0.365, 0.379, 0.355, 0.327])
    beta_array = np.array([0.589, 0.585, 0.544, 0.543, 0.564, 0.623, 0.637, 0.673, 0.702])
    gamma_array = np.array([0.864, 0.922, 0.987, 1.09, 1.20, 1.34, 1.50, 1.68, 1.81])
    phi_array = np.array([-0.729, -0.789, -0.910, -1.05, -1.20, -1.26, -1.45, -1.50, -1.49])
    eta_array = np.array([-0.243, -0.261, -0.261, -0.273, -0.278, -0.301, -0.301, -0.319, -0.336])
    params = []
    for array in [alpha_array, beta_array, gamma_array, phi_array, eta_array]:
        params.append(float(interp(logDv_array, array, fill_value='extrapolate')(logDv))) # Linear interpolation/extrapolation
    return tuple(params)


@lru_cache(maxsize=128)
def _Tinker_bias_parameters(Dv: float) -> tuple:
    '''
    Calibrated halo bias parameters (not from peak-background split) from Table 2
    '''
    y = np.log10(Dv)
    exp = np.exp(-(4./y)**4)
    A = 1.+0.24*y*exp
    a = 0.44*y-0.88
    B = 0.183
    b = 1.5
    C = 0.019+0.107*y+0.19*exp
    c = 2.4
    return A, a, B, b, C, c

### ###
