#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## system-wide power balance and reserve constraints
import logging
import pyomo.environ as pe
import scuc.model_library.decl as decl

logger = logging.getLogger('scuc.model_library.unit_commitment.power_balance')

def add_net_injection_eqs(model, instance):
    '''
    Adds a free net injection variable per bus and period, equal to the
    accumulated injections at the bus, and the lossless power balance
    across all buses of each scenario

    NOTE: eq_net_injection[sc,b,t] is the bus-level balance whose dual
          gives the price at bus b
    '''
    T = instance.time
    bus_periods = [ (sc.name, b.name, t) for sc in instance.scenarios
                        for t in range(1, T+1) for b in sc.buses ]
    periods = [ (sc.name, t) for sc in instance.scenarios for t in range(1, T+1) ]

    decl.declare_var('net_injection', model, bus_periods, within=pe.Reals)
    decl.declare_con('eq_net_injection', model, bus_periods)
    decl.declare_con('eq_power_balance', model, periods)

    net_injection = model.net_injection
    for k in bus_periods:
        model.eq_net_injection[k] = net_injection[k] == model.expr_net_injection[k]

    for sc in instance.scenarios:
        for t in range(1, T+1):
            model.eq_power_balance[sc.name,t] = \
                    sum(net_injection[sc.name,b.name,t] for b in sc.buses) == 0

def add_reserve_eqs(model, instance):
    '''
    Adds the system-wide spinning reserve requirement
    '''
    T = instance.time
    periods = [ (sc.name, t) for sc in instance.scenarios for t in range(1, T+1) ]

    decl.declare_con('eq_min_reserve', model, periods)

    for sc in instance.scenarios:
        for t in range(1, T+1):
            requirement = sc.reserves.spinning[t-1]
            reserve = sum(model.expr_reserve[sc.name,b.name,t] for b in sc.buses)
            if isinstance(reserve, (int, float)):
                ## no unit can provide reserves
                if requirement > reserve:
                    logger.warning("Scenario {} has a spinning reserve requirement of {} at time {} "
                                   "but no units to provide it; dropping the requirement"
                                   .format(sc.name, requirement, t))
                continue
            model.eq_min_reserve[sc.name,t] = reserve >= requirement
