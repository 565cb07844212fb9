#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This module contains helpers for obtaining the injection shift factor
(ISF) and line outage distribution factor (LODF) matrices of a scenario
and the options controlling how they enter the model
"""
import time
import copy as cp
import numpy as np

import scuc.model_library.transmission.tx_calc as tx_calc
from scuc.model_library.defn import ConfigurationError
from scuc.common.log import logger, log_elapsed

def populate_default_network_options(network_options):
    if network_options is None:
        network_options = dict()
    else:
        ## get a copy
        network_options = cp.deepcopy(network_options)
    if 'isf_cutoff' not in network_options:
        network_options['isf_cutoff'] = 0.005
    if 'lodf_cutoff' not in network_options:
        network_options['lodf_cutoff'] = 0.001
    if 'reference_bus' not in network_options:
        network_options['reference_bus'] = None
    if 'transmission_limits' not in network_options:
        network_options['transmission_limits'] = True
    if 'contingency_limits' not in network_options:
        network_options['contingency_limits'] = True
    return network_options

def check_network_options(network_options):
    valid_keys = {'isf_cutoff', 'lodf_cutoff', 'reference_bus',
                  'transmission_limits', 'contingency_limits'}
    unknown = set(network_options) - valid_keys
    if unknown:
        raise ConfigurationError("Unrecognized network options: {}".format(sorted(unknown)))
    for key in ['isf_cutoff', 'lodf_cutoff']:
        val = network_options[key]
        if not isinstance(val, (int, float)) or val < 0.:
            raise ConfigurationError("{} must be a non-negative number, {}={}".format(key, key, val))
    if network_options['isf_cutoff'] > 0.1 or network_options['lodf_cutoff'] > 0.1:
        logger.warning("WARNING: isf_cutoff={0}, lodf_cutoff={1}; cutoffs this large drop "
                       "significant flows from the transmission constraints."
                       .format(network_options['isf_cutoff'], network_options['lodf_cutoff']))

def apply_cutoff(matrix, cutoff):
    """
    Returns a copy of matrix with the entries whose magnitude
    is below cutoff set to zero
    """
    matrix = np.array(matrix, dtype=np.float64)
    matrix[np.abs(matrix) < cutoff] = 0.
    return matrix

def compute_sensitivity_factors(scenario, isf_cutoff=0.005, lodf_cutoff=0.001, reference_bus=None):
    """
    Computes the cut-off ISF and LODF matrices of a scenario

    Rows of the ISF follow scenario.lines, columns follow scenario.buses;
    both dimensions of the LODF follow scenario.lines. A single-bus
    scenario has no meaningful transmission constraints and gets empty
    matrices. The returned arrays are read-only so they can be shared
    between repeated builds.

    Parameters
    ----------
    scenario : scuc.data.instance.Scenario
    isf_cutoff : float
        ISF entries with magnitude below this value are set to zero
    lodf_cutoff : float
        LODF entries with magnitude below this value are set to zero
    reference_bus : str (optional)
        Name of the reference bus, the first bus if None

    Returns
    -------
        tuple of numpy.ndarray : (isf, lodf)
    """
    if len(scenario.buses) == 1:
        isf = np.zeros((0,0))
        lodf = np.zeros((0,0))
    else:
        logger.info("Computing injection shift factors...")
        start_time = time.time()
        isf = tx_calc.calculate_isf(scenario.lines, scenario.buses, reference_bus)
        log_elapsed("Computed ISF", start_time)

        logger.info("Computing line outage factors...")
        start_time = time.time()
        lodf = tx_calc.calculate_lodf(scenario.lines, scenario.buses, isf, reference_bus)
        log_elapsed("Computed LODF", start_time)

        logger.info("Applying ISF and LODF cutoffs ({:.5f}, {:.5f})".format(isf_cutoff, lodf_cutoff))
        isf = apply_cutoff(isf, isf_cutoff)
        lodf = apply_cutoff(lodf, lodf_cutoff)

    isf.flags.writeable = False
    lodf.flags.writeable = False
    return isf, lodf

def check_sensitivity_factors(scenario, isf, lodf=None):
    """
    Checks that user-provided matrices have the shapes
    implied by the lines and buses of scenario
    """
    if len(scenario.buses) == 1:
        return
    n_lines, n_buses = len(scenario.lines), len(scenario.buses)
    if np.shape(isf) != (n_lines, n_buses):
        raise ConfigurationError("ISF for scenario {} must have shape {}, found {}"
                                 .format(scenario.name, (n_lines, n_buses), np.shape(isf)))
    if lodf is not None and np.shape(lodf) != (n_lines, n_lines):
        raise ConfigurationError("LODF for scenario {} must have shape {}, found {}"
                                 .format(scenario.name, (n_lines, n_lines), np.shape(lodf)))
