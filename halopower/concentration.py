# Project imports
from . import constants as const
from .errors import ModelMismatchError, UnknownSelectorError

### Concentration-mass relations ###


class _relation():
    '''
    Base class for a concentration-mass relation and the halo definition it is calibrated for
    '''
    name = None

    def check(self, cosmo, a: float, Dv: float):
        '''
        Raise ModelMismatchError if Dv is not the halo definition of the relation
        '''
        pass

    def __call__(self, cosmo, M: float, a: float) -> float:
        raise NotImplementedError


class _Bhattacharya(_relation):
    '''
    Bhattacharya et al. (2011; 1005.2239; Table 2) for Delta = 200 times the mean matter density
    '''
    name = 'Bhattacharya et al. (2011)'
    Dv = 200.
    A, B, C = 9., -0.29, 1.15

    def check(self, cosmo, a, Dv):
        if Dv != self.Dv:
            raise ModelMismatchError('halo_concentration', '%s concentration relation only valid for Delta_v = %d, not %s'
                                     % (self.name, self.Dv, Dv))

    def __call__(self, cosmo, M, a):
        gz = cosmo.growth_factor(a)
        g0 = cosmo.growth_factor(1.)
        nu = const.delta_c/cosmo.sigmaM(M, a)
        return self.A*nu**self.B*(gz/g0)**self.C


class _Duffy(_relation):
    '''
    Duffy et al (2008; 0804.2486) c(M) relation for WMAP5, See Table 1
    Appropriate for the full (rather than relaxed) samples
    '''
    M_piv = 2e12 # Pivot mass [Msun/h], converted to Msun using h of the cosmology

    def __call__(self, cosmo, M, a):
        M_piv = self.M_piv/cosmo.h
        return self.A*(M/M_piv)**self.B*a**(-self.C)  # Equation (4) in 0804.2486


class _Duffy_virial(_Duffy):
    name = 'Duffy et al. (2008)'
    A, B, C = 7.85, -0.081, -0.71

    def check(self, cosmo, a, Dv):
        if Dv != cosmo.virial_overdensity(a):
            raise ModelMismatchError('halo_concentration', '%s virial concentration called with non-virial Delta_v = %s'
                                     % (self.name, Dv))


class _Duffy_M200(_Duffy):
    name = 'Duffy et al. (2008) M200'
    Dv = 200.
    A, B, C = 10.14, -0.081, -1.01

    def check(self, cosmo, a, Dv):
        if Dv != self.Dv:
            raise ModelMismatchError('halo_concentration', '%s concentration relation only valid for Delta_v = %d, not %s'
                                     % (self.name, self.Dv, Dv))


class _constant(_relation):
    '''
    Constant concentration (good for tests)
    '''
    name = 'constant'
    c = 4.

    def __call__(self, cosmo, M, a):
        return self.c


relations = {relation.name: relation for relation in [_Bhattacharya(), _Duffy_virial(), _Duffy_M200(), _constant()]}

### ###

### Halo concentration ###


def check_method(method: str):
    '''
    Raise UnknownSelectorError if 'method' is not a recognised concentration-mass relation
    '''
    if method not in relations:
        raise UnknownSelectorError('halo_concentration', 'Concentration-mass relation not recognised: %s' % (method))
    return relations[method]


def concentration(cosmo, M: float, a: float, Dv: float, method='Duffy et al. (2008)') -> float:
    '''
    Halo concentration, the ratio of virial radius to scale radius for an NFW halo,
    as a function of halo mass and scale factor
    Args:
        cosmo: Cosmology
        M: Halo mass [Msun]
        a: Scale factor
        Dv: Halo overdensity definition, relative to the mean matter density
        method: Name of concentration-mass relation
            Bhattacharya et al. (2011): Delta_v = 200 only
            Duffy et al. (2008): virial Delta_v only
            Duffy et al. (2008) M200: Delta_v = 200 only
            constant: c = 4 for all haloes
    '''
    relation = check_method(method)
    relation.check(cosmo, a, Dv)
    return relation(cosmo, M, a)

### ###
