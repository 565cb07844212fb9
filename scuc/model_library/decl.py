#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This module has a number of utilities to assist in writing declarations for variables and constraints
"""
import pyomo.environ as pe

def declare_var(varname, model, index_set, **kwargs):
    # if user provides bounds as dict of tuple, translate it
    # into something that Pyomo understands
    if kwargs and 'bounds' in kwargs and isinstance(kwargs['bounds'], dict):
        d = kwargs['bounds']
        bounds_rule = lambda m, *k: d[k if len(k) > 1 else k[0]]
        kwargs['bounds'] = bounds_rule

    # transform the index set into a Pyomo Set
    pyomo_index_set = pe.Set(initialize=index_set, ordered=True)
    model.add_component("_var_{}_index_set".format(varname), pyomo_index_set)

    # now create the var
    model.add_component(varname, pe.Var(pyomo_index_set, **kwargs))
    return getattr(model, varname)

def declare_set(setname, model, index_set, **kwargs):
    # transform the index set into a Pyomo Set
    if 'ordered' not in kwargs:
        # add ordered=True if the user did not specify anything
        kwargs['ordered'] = True
    pyomo_index_set = pe.Set(initialize=index_set, **kwargs)
    model.add_component(setname, pyomo_index_set)
    return pyomo_index_set

def declare_con(conname, model, index_set):
    """
    Declares an (initially empty) indexed constraint; the
    builders fill in the members they need by key
    """
    con_set = declare_set("_con_{}_index_set".format(conname), model, index_set)
    model.add_component(conname, pe.Constraint(con_set))
    return getattr(model, conname)

def declare_expr(exprname, model, index_set, **kwargs):
    # transform the index set into a Pyomo Set
    pyomo_index_set = pe.Set(initialize=index_set, ordered=True)
    model.add_component("_expr_{}_index_set".format(exprname), pyomo_index_set)

    # now create the expr
    model.add_component(exprname, pe.Expression(pyomo_index_set, **kwargs))
    return getattr(model, exprname)
