# Standard imports
import numpy as np

# Third-party imports
import camb

# Parameters
zs_CAMB = [2., 1., 0.5, 0.] # Redshifts for the CAMB interpolator; only z=0 is used but CAMB needs several
kmax_CAMB = 200.            # Maximum wavenumber for the CAMB calculation [Mpc^-1]
kmax_extrap = 1e5           # Maximum wavenumber for extrapolation of the CAMB spectrum [Mpc^-1]


def linear_power(Omega_c: float, Omega_b: float, h: float, ns: float, sigma_8: float,
                 Omega_k=0., m_nu=0., w=-1., wa=0., As=2e-9, verbose=False) -> tuple:
    '''
    Run CAMB once and return the z=0 linear matter power spectrum as a function of k
    Units are not little-h units: k [Mpc^-1] and P(k) [Mpc^3]
    The spectrum is rescaled so that sigma_8 is exactly the value requested, which is valid
    because the linear spectrum is proportional to As
    Args:
        Omega_c: Cold dark matter density
        Omega_b: Baryon density
        h: Dimensionless Hubble parameter
        ns: Spectral index of primordial fluctuations
        sigma_8: Desired normalisation of the linear power spectrum at z=0
        Omega_k: Curvature density
        m_nu: Neutrino mass [eV]
        w, wa: Dark-energy equation of state parameters
        As: Initial guess for the primordial amplitude
        verbose: Verbosity
    Returns:
        Pk_lin(k): z=0 linear power spectrum
        As: Primordial amplitude consistent with sigma_8
    '''
    pars = camb.CAMBparams(WantCls=False)
    pars.set_cosmology(ombh2=Omega_b*h**2, omch2=Omega_c*h**2, H0=100.*h, mnu=m_nu, omk=Omega_k)
    pars.set_dark_energy(w=w, wa=wa, dark_energy_model='ppf')
    pars.InitPower.set_params(As=As, ns=ns, r=0.)
    pars.set_matter_power(redshifts=zs_CAMB, kmax=kmax_CAMB)
    results = camb.get_results(pars)

    # Rescale the amplitude to match sigma_8
    sigma_8_CAMB = results.get_sigma8_0()
    scaling = (sigma_8/sigma_8_CAMB)**2
    interpolator = results.get_matter_power_interpolator(nonlinear=False, hubble_units=False, k_hunit=False,
                                                         extrap_kmax=kmax_extrap)
    if verbose:
        print('Running CAMB')
        print('Omega_m: %1.3f' % (pars.omegam))
        print('Initial sigma_8: %1.4f' % (sigma_8_CAMB))
        print('Desired sigma_8: %1.4f' % (sigma_8))
        print('log10(As): %1.4f' % (np.log10(As*scaling)))
        print()

    def Pk_lin(k):
        return scaling*np.squeeze(interpolator.P(0., k))

    return Pk_lin, As*scaling
