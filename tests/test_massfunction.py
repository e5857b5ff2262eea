# Standard imports
import contextlib
import io
import numpy as np
import unittest
from scipy.integrate import quad

# Project imports
import halopower as halo
import halopower.massfunction as massfunction

### Parameters ###

# Set cosmological parameters
Omega_c = 0.25
Omega_b = 0.05
h = 0.7
ns = 0.96
sigma_8 = 0.8

# Halo mass range
Mmin, Mmax = 1e8, 1e15 # [Msun]

### ###

cosmo = halo.Cosmology(Omega_c, Omega_b, h, ns, sigma_8)
hmfs = {name: halo.mass_function(name) for name in massfunction.names}

class TestMassFunction(unittest.TestCase):

    def test_positive(self):
        for a in [0.5, 1.]:
            Dv = cosmo.virial_overdensity(a)
            for hmf in hmfs.values():
                for M in np.logspace(7., 17., 11):
                    self.assertGreater(hmf.dndlog10M(cosmo, M, a, Dv), 0.)

    @staticmethod
    def test_normalisation():
        # Integral of g(nu) and b(nu)g(nu) over all nu is unity for these mass functions
        for name in ['Press & Schecter (1974)', 'Sheth & Tormen (1999)']:
            hmf = hmfs[name]
            integral, _ = quad(lambda nu: hmf._mass_function_nu(nu, 200.), 0., np.inf)
            np.testing.assert_allclose(integral, 1., rtol=1e-4)
            integral, _ = quad(lambda nu: hmf._mass_function_nu(nu, 200.)*hmf._linear_bias_nu(nu, 200.), 0., np.inf)
            np.testing.assert_allclose(integral, 1., rtol=1e-4)

    @staticmethod
    def test_log10_mass_convention():
        # dn/dlog10(M) already carries the ln(10), so integrating over log10(M) gives the nu-space integral
        a = 1.
        Dv = cosmo.virial_overdensity(a)
        for hmf in hmfs.values():
            def integrand_M(log10M):
                M = 10**log10M
                return hmf.linear_bias(cosmo, M, a, Dv)*hmf.dndlog10M(cosmo, M, a, Dv)*M/cosmo.rhom
            def integrand_nu(nu):
                return hmf._linear_bias_nu(nu, Dv)*hmf._mass_function_nu(nu, Dv)
            I_M, _ = quad(integrand_M, np.log10(Mmin), np.log10(Mmax), epsabs=0., epsrel=1e-8, limit=1000)
            numin, numax = hmf._peak_height(cosmo, Mmin, a), hmf._peak_height(cosmo, Mmax, a)
            I_nu, _ = quad(integrand_nu, numin, numax, epsabs=0., epsrel=1e-8, limit=1000)
            np.testing.assert_allclose(I_M, I_nu, rtol=1e-4)

    def test_Tinker_parameters(self):
        alpha, beta, gamma, phi, eta = massfunction._Tinker_mass_function_parameters(200.)
        self.assertAlmostEqual(alpha, 0.368)
        self.assertAlmostEqual(beta, 0.589)
        self.assertAlmostEqual(gamma, 0.864)
        self.assertAlmostEqual(phi, -0.729)
        self.assertAlmostEqual(eta, -0.243)

    def test_bias_increases_with_mass(self):
        a = 1.
        Dv = cosmo.virial_overdensity(a)
        for hmf in hmfs.values():
            bs = [hmf.linear_bias(cosmo, M, a, Dv) for M in np.logspace(11., 16., 6)]
            self.assertTrue(np.all(np.diff(bs) > 0.))

    def test_unknown(self):
        with self.assertRaises(halo.UnknownSelectorError):
            halo.mass_function('Jenkins et al. (2001)')

    def test_str(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.assertEqual(str(hmfs['Sheth & Tormen (1999)']), '')
        self.assertIn('Mass function: Sheth & Tormen (1999)', stdout.getvalue())
        self.assertIn('p: 0.300; q: 0.707', stdout.getvalue())

### ###

### Unittest ###

if __name__ == '__main__':
    unittest.main()

### ###
