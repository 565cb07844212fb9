#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
sensitivity factor tests
'''
import pytest
import numpy as np

import scuc.model_library.transmission.tx_calc as tx_calc
import scuc.data.ptdf_utils as ptdf_utils
from scuc.data.instance import Bus, time_series
from scuc.model_library.defn import ConfigurationError
from scuc.data.tests.sample_instances import make_line, make_scenario, \
        single_bus_instance, three_bus_instance

def _triangle():
    sc = three_bus_instance(T=1).scenarios[0]
    return sc.lines, sc.buses

def _radial():
    buses = [Bus(name='b{}'.format(i), load=time_series(0., 1)) for i in range(1, 5)]
    lines = [make_line('l1', buses[0], buses[1], 1),
             make_line('l2', buses[1], buses[2], 1, reactance=0.3),
             make_line('l3', buses[1], buses[3], 1, reactance=0.7)]
    return lines, buses

def test_two_bus_isf():
    b1 = Bus(name='b1', load=[0.])
    b2 = Bus(name='b2', load=[0.])
    isf = tx_calc.calculate_isf([make_line('l1', b1, b2, 1)], [b1, b2])
    np.testing.assert_allclose(isf, [[0., -1.]], atol=1e-12)

def test_triangle_isf():
    lines, buses = _triangle()
    isf = tx_calc.calculate_isf(lines, buses)
    expected = np.array([[0., -2./3., -1./3.],
                         [0.,  1./3., -1./3.],
                         [0., -1./3., -2./3.]])
    np.testing.assert_allclose(isf, expected, atol=1e-12)

def test_triangle_isf_reference_bus():
    lines, buses = _triangle()
    isf = tx_calc.calculate_isf(lines, buses, reference_bus='b3')
    np.testing.assert_allclose(isf[:,2], 0., atol=1e-12)
    ## shifting the reference bus changes each row by a constant
    isf1 = tx_calc.calculate_isf(lines, buses)
    diff = isf - isf1
    np.testing.assert_allclose(diff - diff[:,[0]], 0., atol=1e-12)

def test_unknown_reference_bus():
    lines, buses = _triangle()
    with pytest.raises(ConfigurationError):
        tx_calc.calculate_isf(lines, buses, reference_bus='b9')

def test_triangle_lodf():
    lines, buses = _triangle()
    isf = tx_calc.calculate_isf(lines, buses)
    lodf = tx_calc.calculate_lodf(lines, buses, isf)
    expected = np.array([[-1., -1.,  1.],
                         [-1., -1.,  1.],
                         [ 1.,  1., -1.]])
    np.testing.assert_allclose(lodf, expected, atol=1e-12)

def test_radial_factors():
    lines, buses = _radial()
    isf = tx_calc.calculate_isf(lines, buses)
    lodf = tx_calc.calculate_lodf(lines, buses, isf)
    for m in (isf, lodf):
        assert np.all(np.isclose(np.abs(m), 0.) | np.isclose(np.abs(m), 1.))
    ## every line of a radial network islands part of it
    np.testing.assert_allclose(lodf, -np.eye(3), atol=1e-12)

def test_islanding_lines():
    lines, buses = _triangle()
    mapping = { b.name : i for i, b in enumerate(buses) }
    assert tx_calc.get_islanding_lines(lines, mapping) == set()

    lines, buses = _radial()
    mapping = { b.name : i for i, b in enumerate(buses) }
    assert tx_calc.get_islanding_lines(lines, mapping) == {'l1', 'l2', 'l3'}

    ## parallel lines are not bridges
    lines = lines + [make_line('l4', buses[1], buses[0], 1)]
    assert tx_calc.get_islanding_lines(lines, mapping) == {'l2', 'l3'}

def test_disconnected_network(caplog):
    lines, buses = _triangle()
    buses = buses + [Bus(name='b4', load=[0.])]
    isf = tx_calc.calculate_isf(lines, buses)
    assert isf.shape == (3, 4)
    assert 'disconnected' in caplog.text
    assert "Buses outside the main island: ['b4']" in caplog.text

def test_apply_cutoff():
    m = np.array([[0.004, -0.006], [0.5, -0.001]])
    cut = ptdf_utils.apply_cutoff(m, 0.005)
    np.testing.assert_array_equal(cut, [[0., -0.006], [0.5, 0.]])
    ## the input is not modified
    assert m[0,0] == 0.004

def test_compute_sensitivity_factors():
    sc = three_bus_instance(T=1).scenarios[0]
    isf, lodf = ptdf_utils.compute_sensitivity_factors(sc, isf_cutoff=0.4, lodf_cutoff=0.001)
    assert isf.shape == (3, 3)
    assert lodf.shape == (3, 3)
    ## the 1/3 entries fall below the cutoff
    np.testing.assert_allclose(isf, [[0., -2./3., 0.], [0., 0., 0.], [0., 0., -2./3.]], atol=1e-12)
    assert not isf.flags.writeable
    assert not lodf.flags.writeable

def test_single_bus_factors():
    sc = single_bus_instance(T=1).scenarios[0]
    isf, lodf = ptdf_utils.compute_sensitivity_factors(sc)
    assert isf.shape == (0, 0)
    assert lodf.shape == (0, 0)

def test_network_options():
    options = ptdf_utils.populate_default_network_options({'isf_cutoff': 0.01})
    assert options['isf_cutoff'] == 0.01
    assert options['lodf_cutoff'] == 0.001
    assert options['reference_bus'] is None
    ptdf_utils.check_network_options(options)

    with pytest.raises(ConfigurationError):
        ptdf_utils.check_network_options(dict(options, lodf_cutoff=-1.))
    with pytest.raises(ConfigurationError):
        ptdf_utils.check_network_options(dict(options, lazy=True))

def test_check_sensitivity_factors():
    sc = three_bus_instance(T=1).scenarios[0]
    with pytest.raises(ConfigurationError):
        ptdf_utils.check_sensitivity_factors(sc, np.zeros((3, 2)), np.zeros((3, 3)))
    with pytest.raises(ConfigurationError):
        ptdf_utils.check_sensitivity_factors(sc, np.zeros((3, 3)), np.zeros((2, 3)))
