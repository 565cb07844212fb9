#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
This module provides the function that builds the security-constrained
unit commitment model of an instance, and a helper to write it to disk

.. code-block:: python

    from scuc.models.unit_commitment import build_model, write_model

    model = build_model(instance, variable_names=True)
    write_model(model, 'uc.mps')

The model is not solved here; attach any Pyomo solver to it.
'''
import time
import numpy as np
import pyomo.environ as pe

from pyomo.common.collections import ComponentMap

import scuc.data.ptdf_utils as ptdf_utils
import scuc.model_library.transmission.tx_calc as tx_calc
from scuc.model_library.defn import ConfigurationError, CostCategory
from scuc.model_library.transmission import bus, line
from scuc.model_library.unit_commitment import thermal, price_sensitive_load, \
        power_balance, objective
from scuc.common.log import logger, log_elapsed

## unit data the scenario-independent commitment is built from
_commitment_fields = ('initial_status', 'must_run', 'min_uptime', 'min_downtime',
                      'startup_categories')

def _as_list(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    return value

def _check_shared_commitment(instance):
    '''
    The commitment decisions are shared by all scenarios, so every
    scenario must have the same units with the same commitment data
    '''
    first = instance.scenarios[0]
    names = [ g.name for g in first.thermal_units ]
    for sc in instance.scenarios[1:]:
        if [ g.name for g in sc.thermal_units ] != names:
            raise ConfigurationError("Scenario {} does not have the same thermal units as scenario {}"
                                     .format(sc.name, first.name))
        for g0, g in zip(first.thermal_units, sc.thermal_units):
            for field in _commitment_fields:
                if _as_list(getattr(g, field)) != _as_list(getattr(g0, field)):
                    raise ConfigurationError("Thermal unit {} has a different {} in scenario {} than in scenario {}"
                                             .format(g.name, field, sc.name, first.name))

def _by_scenario(matrix, scenario, kind):
    if isinstance(matrix, dict):
        if scenario.name not in matrix:
            raise ConfigurationError("No {} provided for scenario {}".format(kind, scenario.name))
        return matrix[scenario.name]
    return matrix

def _get_sensitivity_factors(instance, isf, lodf, network_options):
    isf_dict = dict()
    lodf_dict = dict()
    if isf is None and lodf is not None:
        raise ConfigurationError("An LODF matrix was provided without an ISF matrix")

    for sc in instance.scenarios:
        if isf is None:
            sc_isf, sc_lodf = ptdf_utils.compute_sensitivity_factors(sc,
                                    isf_cutoff=network_options['isf_cutoff'],
                                    lodf_cutoff=network_options['lodf_cutoff'],
                                    reference_bus=network_options['reference_bus'])
        elif len(sc.buses) == 1:
            sc_isf, sc_lodf = np.zeros((0,0)), np.zeros((0,0))
        else:
            sc_isf = np.asarray(_by_scenario(isf, sc, 'ISF'))
            ptdf_utils.check_sensitivity_factors(sc, sc_isf)
            if lodf is None:
                logger.info("Computing line outage factors...")
                start_time = time.time()
                sc_lodf = tx_calc.calculate_lodf(sc.lines, sc.buses, sc_isf,
                                                 network_options['reference_bus'])
                log_elapsed("Computed LODF", start_time)
                sc_lodf = ptdf_utils.apply_cutoff(sc_lodf, network_options['lodf_cutoff'])
            else:
                sc_lodf = np.asarray(_by_scenario(lodf, sc, 'LODF'))
                ptdf_utils.check_sensitivity_factors(sc, sc_isf, sc_lodf)
        isf_dict[sc.name] = sc_isf
        lodf_dict[sc.name] = sc_lodf
    return isf_dict, lodf_dict

def build_model(instance, isf=None, lodf=None, isf_cutoff=None, lodf_cutoff=None,
                relaxed=False, variable_names=False, network_options=None):
    '''
    Build the security-constrained unit commitment model of an instance.

    Parameters
    ----------
    instance : scuc.data.instance.Instance
        The instance; it is validated first and never modified.
    isf : numpy.ndarray or dict (optional)
        Injection shift factors (lines by buses), either one matrix for
        all scenarios or a dict keyed by scenario name. Used as given.
        If not provided, it is computed.
    lodf : numpy.ndarray or dict (optional)
        Line outage distribution factors (lines by lines), shaped like isf.
        Used as given. If not provided, it is computed from the ISF.
    isf_cutoff : float (optional)
        ISF entries with magnitude smaller than this value are set to
        zero. Overrides network_options['isf_cutoff'], default 0.005.
    lodf_cutoff : float (optional)
        LODF entries with magnitude smaller than this value are set to
        zero. Overrides network_options['lodf_cutoff'], default 0.001.
    relaxed : bool (optional)
        If True, creates a model with the binary variables relaxed to [0,1].
        Default is False.
    variable_names : bool (optional)
        If True, record the name of every variable and constraint in
        model.diagnostic_names and write models with symbolic labels. For
        large models this can take significant time. Default is False.
    network_options : dict (optional)
        See scuc.data.ptdf_utils.populate_default_network_options

    Returns
    -------
        pyomo.environ.ConcreteModel unit commitment model

    '''
    network_options = ptdf_utils.populate_default_network_options(network_options)
    if isf_cutoff is not None:
        network_options['isf_cutoff'] = isf_cutoff
    if lodf_cutoff is not None:
        network_options['lodf_cutoff'] = lodf_cutoff
    ptdf_utils.check_network_options(network_options)

    instance.validate()
    _check_shared_commitment(instance)
    for sc in instance.scenarios:
        for g in sc.thermal_units:
            thermal.check_thermal_unit(g)

    isf_dict, lodf_dict = _get_sensitivity_factors(instance, isf, lodf, network_options)

    logger.info("Building model...")
    start_time = time.time()

    model = pe.ConcreteModel()
    model.name = "SecurityConstrainedUnitCommitment"

    model.uc_instance = instance
    model.isf = isf_dict
    model.lodf = lodf_dict
    model.relax_binaries = relaxed
    model.network_options = network_options

    ## accumulators filled by the component builders
    model.expr_net_injection = dict()
    model.expr_reserve = dict()
    model.cost_terms = { c.value : list() for c in CostCategory }

    line.add_transmission_lines(model, instance)
    bus.add_buses(model, instance)
    thermal.add_unit_commitment(model, instance)
    thermal.add_unit_dispatch(model, instance)
    price_sensitive_load.add_price_sensitive_loads(model, instance)
    power_balance.add_net_injection_eqs(model, instance)
    line.add_transmission_limits(model, instance)
    power_balance.add_reserve_eqs(model, instance)
    objective.add_objective(model)

    log_elapsed("Built model", start_time)

    model.symbolic_solver_labels = False
    if variable_names:
        start_time = time.time()
        _set_names(model)
        log_elapsed("Set variable names", start_time)

    return model

def _set_names(model):
    names = ComponentMap()
    for ctype in (pe.Var, pe.Constraint):
        for component in model.component_objects(ctype, descend_into=True):
            for idx, data in component.items():
                if idx is None:
                    names[data] = component.local_name
                    continue
                if not isinstance(idx, tuple):
                    idx = (idx,)
                names[data] = "{}[{}]".format(component.local_name, ",".join(str(i) for i in idx))
    model.diagnostic_names = names
    model.symbolic_solver_labels = True

def write_model(model, filename, file_format=None):
    '''
    Write the model to an LP or MPS file (inferred from filename
    unless file_format is given), using the symbolic variable and
    constraint names if the model was built with variable_names=True
    '''
    symbolic_solver_labels = getattr(model, 'symbolic_solver_labels', False)
    logger.info("Writing model to {}".format(filename))
    return model.write(filename, format=file_format,
                       io_options={'symbolic_solver_labels': symbolic_solver_labels})
