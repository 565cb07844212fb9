#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This module contains the declarations for the variables and constraints
of thermal units, split into the scenario-independent commitment
decisions (status, transitions and startup categories) and the
per-scenario dispatch (production, reserves, ramping)
"""
import pyomo.environ as pe
import scuc.model_library.decl as decl

from scuc.model_library.defn import ConfigurationError, CostCategory
from .uc_utils import binary_domain, add_cost, lookback_window, initial_transition_periods

def check_thermal_unit(g):
    '''
    Raises ConfigurationError for units which cannot be formulated
    '''
    if any(g.must_run) and not all(g.must_run):
        raise ConfigurationError("Partially must-run units are not currently supported (unit {})".format(g.name))
    if g.initial_power is None or g.initial_status is None:
        raise ConfigurationError("Initial conditions for {} must be provided".format(g.name))
    if g.initial_status == 0:
        raise ConfigurationError("Initial status of {} must be non-zero: positive if on, negative if off".format(g.name))
    if not g.startup_categories:
        raise ConfigurationError("Unit {} needs at least one startup category".format(g.name))

def add_unit_commitment(model, instance):
    '''
    Adds the commitment variables and constraints of every thermal unit.
    These are shared by all scenarios and built from the units of the
    first scenario.
    '''
    T = instance.time
    units = instance.scenarios[0].thermal_units

    unit_periods = [ (g.name, t) for g in units for t in range(1, T+1) ]
    unit_periods_0 = [ (g.name, t) for g in units for t in range(0, T+1) ]
    unit_period_categories = [ (g.name, t, s) for g in units for t in range(1, T+1)
                                    for s in range(1, len(g.startup_categories)+1) ]

    domain = binary_domain(model)
    decl.declare_var('is_on', model, unit_periods, within=domain)
    decl.declare_var('switch_on', model, unit_periods, within=domain)
    decl.declare_var('switch_off', model, unit_periods, within=domain)
    decl.declare_var('startup', model, unit_period_categories, within=domain)

    decl.declare_con('eq_startup_choose', model, unit_periods)
    decl.declare_con('eq_startup_restrict', model, unit_period_categories)
    decl.declare_con('eq_binary_link', model, unit_periods)
    decl.declare_con('eq_switch_on_off', model, unit_periods)
    decl.declare_con('eq_min_uptime', model, unit_periods_0)
    decl.declare_con('eq_min_downtime', model, unit_periods_0)

    for g in units:
        _add_unit_commitment(model, g, T)

def _add_unit_commitment(model, g, T):
    check_thermal_unit(g)

    gi, S = g.name, len(g.startup_categories)
    is_on = model.is_on
    switch_on = model.switch_on
    switch_off = model.switch_off
    startup = model.startup

    is_initially_on = 1. if g.is_initially_on else 0.

    # must-run units have their status fixed, and
    # take no binary decisions
    for t in range(1, T+1):
        if g.must_run[t-1]:
            is_on[gi,t].fix(1.)
            switch_on[gi,t].fix(1. - is_initially_on if t == 1 else 0.)
            switch_off[gi,t].fix(0.)

    ## the pre-horizon shutdown only matters for startup categories
    ## if the unit is initially off
    initial_off_status = g.initial_status if g.initial_status < 0 else None

    for t in range(1, T+1):
        # if the unit is switching on, we must choose a startup category
        model.eq_startup_choose[gi,t] = \
                switch_on[gi,t] == sum(startup[gi,t,s] for s in range(1, S+1))

        for s in range(1, S+1):
            # category s is only allowed if the unit switched off between
            # delay[s] and delay[s+1]-1 periods ago; the last one is always allowed
            if s < S:
                periods, carryover = lookback_window(t, g.startup_categories[s-1].delay,
                                                     g.startup_categories[s].delay - 1,
                                                     initial_off_status)
                model.eq_startup_restrict[gi,t,s] = \
                        startup[gi,t,s] <= (1. if carryover else 0.) + sum(switch_off[gi,i] for i in periods)

            add_cost(model, CostCategory.STARTUP, g.startup_categories[s-1].cost*startup[gi,t,s])

        if not g.must_run[t-1]:
            if t == 1:
                model.eq_binary_link[gi,t] = \
                        is_on[gi,t] - is_initially_on == switch_on[gi,t] - switch_off[gi,t]
            else:
                model.eq_binary_link[gi,t] = \
                        is_on[gi,t] - is_on[gi,t-1] == switch_on[gi,t] - switch_off[gi,t]

            # cannot switch on and off at the same time
            model.eq_switch_on_off[gi,t] = switch_on[gi,t] + switch_off[gi,t] <= 1

        periods, _ = lookback_window(t, 0, g.min_uptime-1)
        model.eq_min_uptime[gi,t] = \
                sum(switch_on[gi,i] for i in periods) <= is_on[gi,t]

        periods, _ = lookback_window(t, 0, g.min_downtime-1)
        model.eq_min_downtime[gi,t] = \
                sum(switch_off[gi,i] for i in periods) <= 1 - is_on[gi,t]

    # the status at the start of the horizon binds
    # for the rest of the minimum up/down time
    if g.initial_status > 0:
        periods = initial_transition_periods(g.initial_status, g.min_uptime, T)
        if periods:
            model.eq_min_uptime[gi,0] = sum(switch_off[gi,i] for i in periods) == 0
    else:
        periods = initial_transition_periods(g.initial_status, g.min_downtime, T)
        if periods:
            model.eq_min_downtime[gi,0] = sum(switch_on[gi,i] for i in periods) == 0

def add_unit_dispatch(model, instance):
    '''
    Adds the production and reserve variables and constraints
    of every thermal unit in every scenario
    '''
    T = instance.time

    unit_periods = [ (sc.name, g.name, t) for sc in instance.scenarios
                        for g in sc.thermal_units for t in range(1, T+1) ]
    unit_periods_0 = [ (sc.name, g.name, t) for sc in instance.scenarios
                        for g in sc.thermal_units for t in range(0, T+1) ]
    unit_period_segments = [ (sc.name, g.name, t, k) for sc in instance.scenarios
                                for g in sc.thermal_units for t in range(1, T+1)
                                for k in range(1, len(g.cost_segments)+1) ]

    decl.declare_var('prod_above', model, unit_periods, within=pe.NonNegativeReals)
    decl.declare_var('segprod', model, unit_period_segments, within=pe.NonNegativeReals)
    decl.declare_var('reserve', model, unit_periods, within=pe.NonNegativeReals)

    decl.declare_con('eq_segprod_limit', model, unit_period_segments)
    decl.declare_con('eq_prod_above_def', model, unit_periods)
    decl.declare_con('eq_prod_limit', model, unit_periods)
    decl.declare_con('eq_ramp_up', model, unit_periods)
    decl.declare_con('eq_ramp_down', model, unit_periods)
    decl.declare_con('eq_startup_limit', model, unit_periods)
    decl.declare_con('eq_shutdown_limit', model, unit_periods_0)

    for sc in instance.scenarios:
        for g in sc.thermal_units:
            _add_unit_dispatch(model, sc, g, T)

def _add_unit_dispatch(model, sc, g, T):
    check_thermal_unit(g)

    sn, gi, K = sc.name, g.name, len(g.cost_segments)
    prob = sc.probability

    is_on = model.is_on
    switch_on = model.switch_on
    switch_off = model.switch_off
    prod_above = model.prod_above
    segprod = model.segprod
    reserve = model.reserve

    for t in range(1, T+1):
        if not g.provides_spinning_reserves[t-1]:
            reserve[sn,gi,t].fix(0.)

    for t in range(1, T+1):
        max_power, min_power = g.max_power[t-1], g.min_power[t-1]

        # production costs
        add_cost(model, CostCategory.NO_LOAD, prob*g.min_power_cost[t-1]*is_on[gi,t])
        for k, seg in enumerate(g.cost_segments, start=1):
            add_cost(model, CostCategory.PRODUCTION, prob*seg.cost[t-1]*segprod[sn,gi,t,k])

        # production limits (piecewise-linear segments)
        for k, seg in enumerate(g.cost_segments, start=1):
            model.eq_segprod_limit[sn,gi,t,k] = \
                    segprod[sn,gi,t,k] <= seg.mw[t-1]*is_on[gi,t]

        model.eq_prod_above_def[sn,gi,t] = \
                prod_above[sn,gi,t] == sum(segprod[sn,gi,t,k] for k in range(1, K+1))

        model.eq_prod_limit[sn,gi,t] = \
                prod_above[sn,gi,t] + reserve[sn,gi,t] <= (max_power - min_power)*is_on[gi,t]

        # ramping; at t=1 only if the unit is initially on
        if t == 1:
            if g.is_initially_on:
                model.eq_ramp_up[sn,gi,t] = \
                        prod_above[sn,gi,t] + reserve[sn,gi,t] <= \
                        (g.initial_power - min_power) + g.ramp_up_limit
                model.eq_ramp_down[sn,gi,t] = \
                        prod_above[sn,gi,t] >= (g.initial_power - min_power) - g.ramp_down_limit
        else:
            model.eq_ramp_up[sn,gi,t] = \
                    prod_above[sn,gi,t] + reserve[sn,gi,t] <= prod_above[sn,gi,t-1] + g.ramp_up_limit
            model.eq_ramp_down[sn,gi,t] = \
                    prod_above[sn,gi,t] >= prod_above[sn,gi,t-1] - g.ramp_down_limit

        model.eq_startup_limit[sn,gi,t] = \
                prod_above[sn,gi,t] + reserve[sn,gi,t] <= \
                (max_power - min_power)*is_on[gi,t] - max(0., max_power - g.startup_limit)*switch_on[gi,t]

        if t < T:
            model.eq_shutdown_limit[sn,gi,t] = \
                    prod_above[sn,gi,t] <= \
                    (max_power - min_power)*is_on[gi,t] - max(0., max_power - g.shutdown_limit)*switch_off[gi,t+1]

        model.expr_net_injection[sn,g.bus.name,t] += prod_above[sn,gi,t] + min_power*is_on[gi,t]
        model.expr_reserve[sn,g.bus.name,t] += reserve[sn,gi,t]

    # a unit producing above its shutdown limit cannot stop in the first period
    if g.initial_power > g.shutdown_limit:
        model.eq_shutdown_limit[sn,gi,0] = switch_off[gi,1] <= 0
