#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This module defines some utilities for handling Instance data
"""

def _slice_time_series(element, time_indices, **replacements):
    '''
    Returns a copy of element (any of the named tuples in
    scuc.data.instance) with each of its time series sliced by
    time_indices and the other fields replaced by replacements
    '''
    new_fields = dict(replacements)
    for field in element._time_series_fields:
        vals = getattr(element, field)
        new_fields[field] = [vals[i] for i in time_indices]
    return element._replace(**new_fields)

def slice_scenario(scenario, time_indices):
    '''
    Slices every time series in scenario, re-linking the
    bus and line references to the sliced copies
    '''
    new_buses = { b.name: _slice_time_series(b, time_indices) for b in scenario.buses }

    new_lines = dict()
    for l in scenario.lines:
        new_lines[l.name] = _slice_time_series(l, time_indices,
                                               source=new_buses[l.source.name],
                                               target=new_buses[l.target.name])

    thermal_units = list()
    for g in scenario.thermal_units:
        segments = [_slice_time_series(seg, time_indices) for seg in g.cost_segments]
        thermal_units.append(_slice_time_series(g, time_indices,
                                                bus=new_buses[g.bus.name],
                                                cost_segments=segments))

    price_sensitive_loads = [ _slice_time_series(ps, time_indices, bus=new_buses[ps.bus.name])
                              for ps in scenario.price_sensitive_loads ]

    contingencies = [ c._replace(line=new_lines[c.line.name]) for c in scenario.contingencies ]

    return _slice_time_series(scenario, time_indices,
                              buses=list(new_buses.values()),
                              lines=list(new_lines.values()),
                              thermal_units=thermal_units,
                              price_sensitive_loads=price_sensitive_loads,
                              reserves=_slice_time_series(scenario.reserves, time_indices),
                              contingencies=contingencies)
