# Standard imports
import contextlib
import io
import numpy as np
import unittest

# Project imports
import halopower as halo
import halopower.cosmology as cosmology

### Parameters ###

# Set cosmological parameters
Omega_c = 0.25
Omega_b = 0.05
h = 0.7
ns = 0.96
sigma_8 = 0.8

# Scale factors
scale_factors = [0.1, 0.25, 0.5, 0.75, 1.]

### ###

cosmo = halo.Cosmology(Omega_c, Omega_b, h, ns, sigma_8)
cosmo_EdS = halo.Cosmology(0.95, 0.05, h, ns, sigma_8)

class TestBackground(unittest.TestCase):

    @staticmethod
    def test_matter_density():
        np.testing.assert_allclose(cosmo.mean_matter_density(1.), 2.775e11*0.3*h**2, rtol=1e-3)
        np.testing.assert_equal(cosmo.mean_matter_density(0.5), cosmo.mean_matter_density(1.))

    @staticmethod
    def test_Dv_BryanNorman():
        np.testing.assert_allclose(cosmology.Dv_BryanNorman(1.), 18.*np.pi**2, rtol=1e-14)
        np.testing.assert_allclose(cosmo_EdS.virial_overdensity(0.5), 18.*np.pi**2, rtol=1e-12)
        assert 300. < cosmo.virial_overdensity(1.) < 350.

    @staticmethod
    def test_virial_radius():
        for M in [1e10, 1e13, 1e16]:
            for Dv in [200., cosmo.virial_overdensity(1.)]:
                rv = cosmo.virial_radius(M, 1., Dv)
                np.testing.assert_allclose(cosmology.mass(rv, Dv*cosmo.rhom), M, rtol=1e-12)


class TestGrowth(unittest.TestCase):

    def test_normalisation(self):
        self.assertEqual(cosmo.growth_factor(1.), 1.)

    @staticmethod
    def test_EdS():
        for a in scale_factors:
            np.testing.assert_allclose(cosmo_EdS.growth_factor(a), a, rtol=1e-5)

    def test_LCDM(self):
        gs = [cosmo.growth_factor(a) for a in scale_factors]
        self.assertTrue(np.all(np.diff(gs) > 0.))
        for a, g in zip(scale_factors, gs):
            self.assertGreaterEqual(g, a) # Growth is suppressed by dark energy at late times

    def test_bad_scale_factor(self):
        with self.assertRaises(ValueError):
            cosmo.growth_factor(0.)

    def test_cache_bounded(self):
        for a in np.linspace(0.01, 1., 2000):
            cosmo.growth_factor(a)
        info = cosmology._growth_unnormalised.cache_info()
        self.assertLessEqual(info.currsize, info.maxsize)
        self.assertEqual(cosmo.growth_factor(1.), 1.)


class TestPrint(unittest.TestCase):

    def test_str(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.assertEqual(str(cosmo), '')
        self.assertIn('sigma_8: %1.4f' % (sigma_8), stdout.getvalue())
        self.assertIn('Omega_m: 0.300', stdout.getvalue())


class TestLinear(unittest.TestCase):

    @staticmethod
    def test_sigma_8():
        np.testing.assert_allclose(cosmo.sigma_8, sigma_8, rtol=1e-10)
        M_8 = cosmology.mass(8./h, cosmo.rhom)
        np.testing.assert_allclose(cosmo.sigmaM(M_8, 1.), sigma_8, rtol=1e-4)

    @staticmethod
    def test_linear_power_growth():
        for k in [1e-3, 0.1, 10.]:
            np.testing.assert_allclose(cosmo.linear_power(k, 0.5)/cosmo.linear_power(k, 1.),
                                       cosmo.growth_factor(0.5)**2, rtol=1e-12)

    def test_sigma_mass_dependence(self):
        Ms = np.logspace(7., 17., 11)
        sigmas = np.array([cosmo.sigmaM(M, 1.) for M in Ms])
        self.assertTrue(np.all(np.diff(sigmas) < 0.))
        for M in Ms:
            self.assertLess(cosmo.dlnsigma_dlnM(M), 0.)

    def test_supplied_power(self):
        cosmo_Pk = halo.Cosmology(Omega_c, Omega_b, h, ns, 0.5, Pk_lin=lambda k: cosmo.linear_power(k, 1.))
        self.assertAlmostEqual(cosmo_Pk.sigma_8, cosmo.sigma_8, places=10)

    def test_bad_parameters(self):
        with self.assertRaises(ValueError):
            halo.Cosmology(-0.3, 0., h, ns, sigma_8)
        with self.assertRaises(ValueError):
            halo.Cosmology(Omega_c, Omega_b, -h, ns, sigma_8)

### ###

### Unittest ###

if __name__ == '__main__':
    unittest.main()

### ###
