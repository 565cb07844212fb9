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
typically used for transmission lines: the penalized overflow
variables and the (N-1) flow limits expressed through the injection
shift factors and line outage distribution factors
"""
import math
import pyomo.environ as pe
import scuc.model_library.decl as decl

from scuc.model_library.defn import CostCategory
from scuc.model_library.unit_commitment.uc_utils import add_cost

def add_transmission_lines(model, instance):
    """
    Create the overflow variables, i.e., the permitted excursion of
    each line beyond its limits, penalized in the objective
    """
    T = instance.time
    line_periods = [ (sc.name, l.name, t) for sc in instance.scenarios
                        for l in sc.lines for t in range(1, T+1) ]

    decl.declare_var('overflow', model, line_periods, within=pe.NonNegativeReals)

    for sc in instance.scenarios:
        for l in sc.lines:
            for t in range(1, T+1):
                add_cost(model, CostCategory.OVERFLOW,
                         sc.probability*l.flow_limit_penalty[t-1]*model.overflow[sc.name,l.name,t])

def add_transmission_limits(model, instance):
    """
    Create the line flow expressions from the net injection variables
    and bound them by the normal limits, and the post-contingency flows
    by the emergency limits. Requires the net injection variables.
    """
    T = instance.time
    options = model.network_options

    line_periods = [ (sc.name, l.name, t) for sc in instance.scenarios
                        for l in sc.lines for t in range(1, T+1)
                        if len(sc.buses) > 1 ]
    contingency_periods = [ (sc.name, c.name, l.name, t) for sc in instance.scenarios
                                for c in sc.contingencies for l in sc.lines
                                for t in range(1, T+1)
                                if len(sc.buses) > 1 and l is not c.line ]

    scenarios_by_name = instance.scenarios_by_name
    line_index = { sc.name : { l.name : row for row, l in enumerate(sc.lines) }
                    for sc in instance.scenarios }

    def flow_rule(m, sn, ln, t):
        buses = scenarios_by_name[sn].buses
        isf_row = m.isf[sn][line_index[sn][ln]]
        return sum(float(isf_row[col])*m.net_injection[sn,b.name,t]
                    for col, b in enumerate(buses) if isf_row[col] != 0.)
    decl.declare_expr('expr_flow', model, line_periods, rule=flow_rule)

    decl.declare_con('ineq_flow_limit_ub', model, line_periods)
    decl.declare_con('ineq_flow_limit_lb', model, line_periods)
    decl.declare_con('ineq_contingency_limit_ub', model, contingency_periods)
    decl.declare_con('ineq_contingency_limit_lb', model, contingency_periods)

    for sc in instance.scenarios:
        if len(sc.buses) == 1:
            continue
        if options['transmission_limits']:
            for l in sc.lines:
                _add_flow_limits(model, sc, l, T)
        if options['contingency_limits']:
            for c in sc.contingencies:
                _add_contingency_limits(model, sc, c, line_index[sc.name], T)

def _add_flow_limits(model, sc, l, T):
    sn, ln = sc.name, l.name
    flow = model.expr_flow
    overflow = model.overflow
    for t in range(1, T+1):
        limit = l.normal_flow_limit[t-1]
        if math.isinf(limit):
            continue
        model.ineq_flow_limit_ub[sn,ln,t] = flow[sn,ln,t] <= limit + overflow[sn,ln,t]
        model.ineq_flow_limit_lb[sn,ln,t] = flow[sn,ln,t] >= -limit - overflow[sn,ln,t]

def _add_contingency_limits(model, sc, c, line_index, T):
    sn, cn, on = sc.name, c.name, c.line.name
    flow = model.expr_flow
    overflow = model.overflow
    lodf = model.lodf[sn]
    col = line_index[on]
    for l in sc.lines:
        if l is c.line:
            continue
        ln = l.name
        factor = float(lodf[line_index[ln],col])
        if factor == 0.:
            continue
        for t in range(1, T+1):
            limit = l.emergency_flow_limit[t-1]
            if math.isinf(limit):
                continue
            post_contingency_flow = flow[sn,ln,t] + factor*flow[sn,on,t]
            model.ineq_contingency_limit_ub[sn,cn,ln,t] = post_contingency_flow <= limit + overflow[sn,ln,t]
            model.ineq_contingency_limit_lb[sn,cn,ln,t] = post_contingency_flow >= -limit - overflow[sn,ln,t]
