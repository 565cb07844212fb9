#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for price-sensitive loads
import scuc.model_library.decl as decl

from scuc.model_library.defn import CostCategory
from .uc_utils import add_cost

def add_price_sensitive_loads(model, instance):
    T = instance.time
    load_periods = [ (sc.name, ps.name, t) for sc in instance.scenarios
                        for ps in sc.price_sensitive_loads for t in range(1, T+1) ]
    load_bounds = { (sc.name, ps.name, t) : (0., ps.demand[t-1]) for sc in instance.scenarios
                        for ps in sc.price_sensitive_loads for t in range(1, T+1) }

    decl.declare_var('loads', model, load_periods, bounds=load_bounds)

    for sc in instance.scenarios:
        for ps in sc.price_sensitive_loads:
            _add_price_sensitive_load(model, sc, ps, T)

def _add_price_sensitive_load(model, sc, ps, T):
    sn = sc.name
    loads = model.loads
    for t in range(1, T+1):
        # revenue is a negative cost
        add_cost(model, CostCategory.REVENUE, -sc.probability*ps.revenue[t-1]*loads[sn,ps.name,t])

        # served demand is withdrawn at the bus
        model.expr_net_injection[sn,ps.bus.name,t] -= loads[sn,ps.name,t]
