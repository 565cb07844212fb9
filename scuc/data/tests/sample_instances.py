#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
small instances shared by the tests
'''
from scuc.data.instance import Bus, TransmissionLine, CostSegment, StartupCategory, \
        ThermalUnit, PriceSensitiveLoad, Reserves, Contingency, Scenario, Instance, \
        time_series, DEFAULT_POWER_BALANCE_PENALTY, DEFAULT_FLOW_LIMIT_PENALTY

def make_unit(name, bus, T, min_power=10., max_power=50., initial_status=-2,
              initial_power=0., must_run=False, min_uptime=1, min_downtime=1,
              ramp_up_limit=1000., ramp_down_limit=1000., startup_limit=1000.,
              shutdown_limit=1000., startup_categories=None, segments=None,
              min_power_cost=10., reserves=False):
    if startup_categories is None:
        startup_categories = [StartupCategory(delay=1, cost=0.)]
    if segments is None:
        segments = [(max_power - min_power, 5.)]
    return ThermalUnit(name=name, bus=bus,
                       max_power=time_series(max_power, T),
                       min_power=time_series(min_power, T),
                       must_run=time_series(must_run, T),
                       min_power_cost=time_series(min_power_cost, T),
                       cost_segments=[CostSegment(mw=time_series(mw, T), cost=time_series(cost, T))
                                      for mw, cost in segments],
                       min_uptime=min_uptime, min_downtime=min_downtime,
                       ramp_up_limit=ramp_up_limit, ramp_down_limit=ramp_down_limit,
                       startup_limit=startup_limit, shutdown_limit=shutdown_limit,
                       initial_status=initial_status, initial_power=initial_power,
                       startup_categories=startup_categories,
                       provides_spinning_reserves=time_series(reserves, T))

def make_line(name, source, target, T, reactance=0.1, normal_limit=float('inf'),
              emergency_limit=float('inf')):
    return TransmissionLine(name=name, source=source, target=target, reactance=reactance,
                            normal_flow_limit=time_series(normal_limit, T),
                            emergency_flow_limit=time_series(emergency_limit, T),
                            flow_limit_penalty=time_series(DEFAULT_FLOW_LIMIT_PENALTY, T))

def make_scenario(name, buses, T, lines=(), units=(), loads=(), spinning=0.,
                  probability=1.0, contingencies=()):
    return Scenario(name=name, buses=list(buses), lines=list(lines),
                    thermal_units=list(units), price_sensitive_loads=list(loads),
                    reserves=Reserves(spinning=time_series(spinning, T)),
                    power_balance_penalty=time_series(DEFAULT_POWER_BALANCE_PENALTY, T),
                    probability=probability, contingencies=list(contingencies))

def single_bus_instance(T=1, load=20., **unit_kwargs):
    '''
    one bus, one unit (10 to 50 MW by default)
    '''
    b1 = Bus(name='b1', load=time_series(load, T))
    g1 = make_unit('g1', b1, T, **unit_kwargs)
    return Instance(time=T, scenarios=[make_scenario('s1', [b1], T, units=[g1])])

def three_bus_instance(T=2, limit=float('inf'), emergency_limit=float('inf')):
    '''
    triangle network: cheap unit at b1, expensive unit at b2,
    load at b3, and an outage of each line
    '''
    b1 = Bus(name='b1', load=time_series(0., T))
    b2 = Bus(name='b2', load=time_series(0., T))
    b3 = Bus(name='b3', load=time_series(100., T))
    l1 = make_line('l1', b1, b2, T, normal_limit=limit, emergency_limit=emergency_limit)
    l2 = make_line('l2', b2, b3, T, normal_limit=limit, emergency_limit=emergency_limit)
    l3 = make_line('l3', b1, b3, T, normal_limit=limit, emergency_limit=emergency_limit)
    g1 = make_unit('g1', b1, T, min_power=0., max_power=200., segments=[(200., 10.)],
                   min_power_cost=0.)
    g2 = make_unit('g2', b2, T, min_power=0., max_power=200., segments=[(200., 50.)],
                   min_power_cost=0.)
    ps = PriceSensitiveLoad(name='ps1', bus=b3, demand=time_series(10., T),
                            revenue=time_series(1000., T))
    contingencies = [Contingency(name='c{}'.format(i), line=l) for i, l in enumerate([l1, l2, l3], start=1)]
    sc = make_scenario('s1', [b1, b2, b3], T, lines=[l1, l2, l3], units=[g1, g2],
                       loads=[ps], contingencies=contingencies)
    return Instance(time=T, scenarios=[sc])
