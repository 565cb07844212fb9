#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for the objective
import pyomo.environ as pe
import scuc.model_library.decl as decl

from pyomo.core.util import quicksum
from scuc.model_library.defn import CostCategory

def add_objective(model):
    '''
    Sums the cost contributions gathered by the component builders,
    one expression per scuc.model_library.defn.CostCategory, into the
    (minimized) objective
    '''
    categories = [ c.value for c in CostCategory ]

    def cost_rule(m, c):
        return quicksum(m.cost_terms[c])
    decl.declare_expr('expr_cost', model, categories, rule=cost_rule)

    model.obj = pe.Objective(expr=sum(model.expr_cost[c] for c in categories), sense=pe.minimize)
