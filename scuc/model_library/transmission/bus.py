#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This module contains the declarations for the modeling components
typically used for buses
"""
import scuc.model_library.decl as decl

from scuc.model_library.defn import CostCategory
from scuc.model_library.unit_commitment.uc_utils import add_cost

def add_buses(model, instance):
    """
    Starts the net injection and reserve accumulators of every bus
    and adds the (penalized) load curtailment variables
    """
    T = instance.time
    bus_periods = [ (sc.name, b.name, t) for sc in instance.scenarios
                        for b in sc.buses for t in range(1, T+1) ]
    curtail_bounds = { (sc.name, b.name, t) : (0., b.load[t-1]) for sc in instance.scenarios
                        for b in sc.buses for t in range(1, T+1) }

    decl.declare_var('curtail', model, bus_periods, bounds=curtail_bounds)

    for sc in instance.scenarios:
        for b in sc.buses:
            _add_bus(model, sc, b, T)

def _add_bus(model, sc, b, T):
    sn, bn = sc.name, b.name
    curtail = model.curtail
    for t in range(1, T+1):
        # fixed load
        model.expr_net_injection[sn,bn,t] = -b.load[t-1]

        # reserves
        model.expr_reserve[sn,bn,t] = 0.

        # load curtailment
        model.expr_net_injection[sn,bn,t] += curtail[sn,bn,t]
        add_cost(model, CostCategory.CURTAILMENT, sc.probability*sc.power_balance_penalty[t-1]*curtail[sn,bn,t])
