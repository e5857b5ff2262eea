# Standard imports
import numpy as np
import unittest

# Project imports
import halopower as halo

### Parameters ###

# Set cosmological parameters
Omega_c = 0.25
Omega_b = 0.05
h = 0.7
ns = 0.96
sigma_8 = 0.8

# Haloes
Ms = [1e10, 1e12, 1e14, 1e16] # [Msun]
scale_factors = [0.25, 0.5, 1.]

### ###

cosmo = halo.Cosmology(Omega_c, Omega_b, h, ns, sigma_8)

class TestConcentration(unittest.TestCase):

    def test_constant(self):
        for M in Ms:
            for a in scale_factors:
                for Dv in [200., cosmo.virial_overdensity(a), 1234.]:
                    self.assertEqual(halo.concentration(cosmo, M, a, Dv, method='constant'), 4.)

    def test_Bhattacharya_mismatch(self):
        with self.assertRaises(halo.ModelMismatchError):
            halo.concentration(cosmo, 1e13, 1., 300., method='Bhattacharya et al. (2011)')
        c, error = halo.power_with_status(halo.concentration, cosmo, 1e13, 1., 300., method='Bhattacharya et al. (2011)')
        self.assertTrue(np.isnan(c))
        self.assertIsInstance(error, halo.ModelMismatchError)
        self.assertEqual(error.component, 'halo_concentration')

    @staticmethod
    def test_Bhattacharya():
        M = 1e13
        for a in scale_factors:
            nu = 1.686/cosmo.sigmaM(M, a)
            c = halo.concentration(cosmo, M, a, 200., method='Bhattacharya et al. (2011)')
            np.testing.assert_allclose(c, 9.*nu**-0.29*cosmo.growth_factor(a)**1.15, rtol=1e-12)

    def test_Bhattacharya_mass_dependence(self):
        cs = [halo.concentration(cosmo, M, 1., 200., method='Bhattacharya et al. (2011)') for M in Ms]
        self.assertTrue(np.all(np.diff(cs) < 0.))

    def test_Duffy_mismatch(self):
        for a in scale_factors:
            with self.assertRaises(halo.ModelMismatchError):
                halo.concentration(cosmo, 1e13, a, 200., method='Duffy et al. (2008)')
        with self.assertRaises(halo.ModelMismatchError):
            halo.concentration(cosmo, 1e13, 1., cosmo.virial_overdensity(1.), method='Duffy et al. (2008) M200')

    @staticmethod
    def test_Duffy():
        for M in Ms:
            for a in scale_factors:
                Dv = cosmo.virial_overdensity(a)
                c = halo.concentration(cosmo, M, a, Dv, method='Duffy et al. (2008)')
                np.testing.assert_allclose(c, 7.85*(M*h/2e12)**-0.081*a**0.71, rtol=1e-12)
                c = halo.concentration(cosmo, M, a, 200., method='Duffy et al. (2008) M200')
                np.testing.assert_allclose(c, 10.14*(M*h/2e12)**-0.081*a**1.01, rtol=1e-12)

    def test_unknown(self):
        with self.assertRaises(halo.UnknownSelectorError):
            halo.concentration(cosmo, 1e13, 1., 200., method='Prada et al. (2012)')
        with self.assertRaises(ValueError):
            halo.concentration(cosmo, 1e13, 1., 200., method='Prada et al. (2012)')
        c, error = halo.power_with_status(halo.concentration, cosmo, 1e13, 1., 200., method='Prada et al. (2012)')
        self.assertTrue(np.isnan(c))
        self.assertIsInstance(error, halo.UnknownSelectorError)

### ###

### Unittest ###

if __name__ == '__main__':
    unittest.main()

### ###
