#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________


"""
This module contains several helper functions that are useful when
working with unit commitment models
"""
import pyomo.environ as pe

def binary_domain(model):
    ''' Binary, or UnitInterval if the model is built relaxed '''
    if getattr(model, 'relax_binaries', False):
        return pe.UnitInterval
    return pe.Binary

def add_cost(model, category, term):
    '''
    Appends term to the objective contributions of the given
    scuc.model_library.defn.CostCategory
    '''
    model.cost_terms[category.value].append(term)

def lookback_window(t, min_age, max_age, initial_status=None):
    '''
    Returns the periods i, 1 <= i <= t, with min_age <= t - i <= max_age,
    i.e., the periods in which a transition must have happened to be
    between min_age and max_age periods old at time t.

    If initial_status is given, also reports whether the last
    transition before the horizon falls in the same window. A unit
    which has been on (off) for n periods at the start of the horizon,
    initial_status = n (-n), last switched on (off) in period 1 - n.

    Parameters
    ----------
    t : int
        Current period, the first period being 1
    min_age : int
        Youngest age of the transition, in periods
    max_age : int
        Oldest age of the transition, in periods
    initial_status : int (optional)
        Signed number of periods the unit was on (positive)
        or off (negative) before the first period

    Returns
    -------
        tuple : (list of periods, bool carryover)
    '''
    periods = list(range(max(1, t - max_age), t - min_age + 1))
    carryover = False
    if initial_status is not None:
        last_transition = 1 - abs(initial_status)
        carryover = (t - max_age) <= last_transition <= (t - min_age)
    return periods, carryover

def initial_transition_periods(initial_status, min_time, time):
    '''
    Periods in 1..time during which a unit must keep the status it had
    at the start of the horizon, given its minimum up (or down) time
    '''
    return [ t for t in range(1, time+1)
                if lookback_window(t, 0, min_time-1, initial_status)[1] ]
