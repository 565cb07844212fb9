#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
The data used for building unit commitment models is stored in a small
hierarchy of immutable named tuples:

.. code-block:: python

    Instance(time=T, scenarios=[
        Scenario(name='s1',
                 buses=[Bus(name='b1', load=[...]), ...],
                 lines=[TransmissionLine(name='l1', source=<Bus>, target=<Bus>, ...), ...],
                 thermal_units=[ThermalUnit(name='g1', bus=<Bus>, ...), ...],
                 price_sensitive_loads=[PriceSensitiveLoad(...), ...],
                 reserves=Reserves(spinning=[...]),
                 power_balance_penalty=[...],
                 probability=1.0,
                 contingencies=[Contingency(name='c1', line=<TransmissionLine>), ...]),
        ...])

* Every attribute listed in a class's ``_time_series_fields`` is a sequence
  with exactly ``Instance.time`` entries, the first entry being period 1.

* Lines, thermal units and price-sensitive loads hold references to the
  ``Bus`` objects of their own scenario; contingencies hold references to
  lines of their own scenario.

* Instances are never modified by the model builder. Use
  :py:meth:`Instance.clone_at_time_indices` to obtain a shorter horizon.
"""
import math
import logging
from collections import namedtuple

from scuc.model_library.defn import ConfigurationError
import scuc.data.data_utils as du

logger = logging.getLogger('scuc.data.instance')

## penalties used when the data does not provide them, in $/MW
DEFAULT_POWER_BALANCE_PENALTY = 1000.
DEFAULT_FLOW_LIMIT_PENALTY = 5000.


def time_series(value, time):
    """
    Expand a scalar into a list with one entry per time period
    """
    return [value]*time


class Bus(namedtuple('Bus', ['name', 'load'])):
    __slots__ = ()
    _time_series_fields = ('load',)


class TransmissionLine(namedtuple('TransmissionLine',
                                  ['name', 'source', 'target', 'reactance',
                                   'normal_flow_limit', 'emergency_flow_limit',
                                   'flow_limit_penalty'])):
    __slots__ = ()
    _time_series_fields = ('normal_flow_limit', 'emergency_flow_limit', 'flow_limit_penalty')


class CostSegment(namedtuple('CostSegment', ['mw', 'cost'])):
    '''
    One piece of a piecewise-linear production cost curve above minimum
    power: up to mw[t] MW at a marginal cost of cost[t] $/MW
    '''
    __slots__ = ()
    _time_series_fields = ('mw', 'cost')


class StartupCategory(namedtuple('StartupCategory', ['delay', 'cost'])):
    '''
    A startup category becomes eligible once the unit has been off for at
    least `delay` periods, and stays eligible until the next category does
    '''
    __slots__ = ()
    _time_series_fields = ()


class ThermalUnit(namedtuple('ThermalUnit',
                             ['name', 'bus', 'max_power', 'min_power', 'must_run',
                              'min_power_cost', 'cost_segments', 'min_uptime',
                              'min_downtime', 'ramp_up_limit', 'ramp_down_limit',
                              'startup_limit', 'shutdown_limit', 'initial_status',
                              'initial_power', 'startup_categories',
                              'provides_spinning_reserves'])):
    __slots__ = ()
    _time_series_fields = ('max_power', 'min_power', 'must_run', 'min_power_cost',
                           'provides_spinning_reserves')

    @property
    def is_initially_on(self):
        return self.initial_status is not None and self.initial_status > 0


class PriceSensitiveLoad(namedtuple('PriceSensitiveLoad', ['name', 'bus', 'demand', 'revenue'])):
    __slots__ = ()
    _time_series_fields = ('demand', 'revenue')


class Reserves(namedtuple('Reserves', ['spinning'])):
    __slots__ = ()
    _time_series_fields = ('spinning',)


class Contingency(namedtuple('Contingency', ['name', 'line'])):
    '''
    Outage of a single transmission line
    '''
    __slots__ = ()
    _time_series_fields = ()


class Scenario(namedtuple('Scenario',
                          ['name', 'buses', 'lines', 'thermal_units',
                           'price_sensitive_loads', 'reserves',
                           'power_balance_penalty', 'probability',
                           'contingencies'],
                          defaults=(1.0, ()))):
    __slots__ = ()
    _time_series_fields = ('power_balance_penalty',)

    @property
    def buses_by_name(self):
        return {b.name: b for b in self.buses}

    @property
    def lines_by_name(self):
        return {l.name: l for l in self.lines}

    @property
    def thermal_units_by_name(self):
        return {g.name: g for g in self.thermal_units}


class Instance(namedtuple('Instance', ['time', 'scenarios'])):
    __slots__ = ()

    @property
    def scenarios_by_name(self):
        return {sc.name: sc for sc in self.scenarios}

    def validate(self):
        """
        Checks the structure of this instance, raising
        ConfigurationError on the first problem found
        """
        validate_instance(self)

    def clone_at_time_indices(self, time_indices):
        """
        Create a copy of this Instance using only the given time indices.

        Every time series is sliced with time_indices, i.e.,
        [attribute[i] for i in time_indices], and the horizon length
        is updated accordingly. Initial conditions are left unchanged.

        Parameters
        ----------
        time_indices : list of ints
            The 0-based indices into the time series to keep

        Returns
        -------
            Instance
        """
        time_indices = list(time_indices)
        for i in time_indices:
            if not (0 <= i < self.time):
                raise ValueError("time index {} is outside of the horizon [0, {})".format(i, self.time))
        scenarios = [du.slice_scenario(sc, time_indices) for sc in self.scenarios]
        return Instance(time=len(time_indices), scenarios=scenarios)


def _series_length(series):
    if isinstance(series, (str, bytes)):
        return None
    try:
        return len(series)
    except TypeError:
        return None


def _check_time_series(element, label, time):
    for field in element._time_series_fields:
        found = _series_length(getattr(element, field))
        if found != time:
            raise ConfigurationError("{}: attribute {} must be a sequence of exactly {} entries, found {}"
                                     .format(label, field, time, found))


def _check_unique_names(names, kind, scenario):
    seen = set()
    for name in names:
        if name in seen:
            raise ConfigurationError("Scenario {}: {} name {} is not unique".format(scenario.name, kind, name))
        seen.add(name)


def _check_bus_reference(bus, buses_by_name, kind, name, scenario):
    if bus is None or buses_by_name.get(bus.name) is not bus:
        raise ConfigurationError("{} {} references bus {} which is not a bus of scenario {}"
                                 .format(kind, name, getattr(bus, 'name', None), scenario.name))


def validate_instance(instance):
    """
    Checks an Instance before a model is built from it.

    Verifies that every time-indexed attribute has exactly
    instance.time entries, that every bus (line) reference points
    to a bus (line) of the same scenario, and that the startup
    categories of each unit have strictly increasing delays.

    Parameters
    ----------
    instance : scuc.data.instance.Instance

    Raises
    ------
    ConfigurationError
    """
    T = instance.time
    if not isinstance(T, int) or T < 1:
        raise ConfigurationError("The time horizon must be a positive integer, found {}".format(T))
    if not instance.scenarios:
        raise ConfigurationError("An instance needs at least one scenario")

    names = [sc.name for sc in instance.scenarios]
    if len(set(names)) != len(names):
        raise ConfigurationError("Scenario names must be unique, found {}".format(names))

    for sc in instance.scenarios:
        if not sc.buses:
            raise ConfigurationError("Scenario {} has no buses".format(sc.name))
        _check_time_series(sc, "Scenario {}".format(sc.name), T)
        _check_time_series(sc.reserves, "Scenario {} reserves".format(sc.name), T)
        buses_by_name = sc.buses_by_name
        _check_unique_names([b.name for b in sc.buses], "bus", sc)
        for b in sc.buses:
            _check_time_series(b, "Bus {}".format(b.name), T)
            if any(l < 0 for l in b.load):
                raise ConfigurationError("Bus {} has a negative load".format(b.name))

        _check_unique_names([l.name for l in sc.lines], "line", sc)
        lines_by_name = sc.lines_by_name
        for l in sc.lines:
            _check_time_series(l, "TransmissionLine {}".format(l.name), T)
            _check_bus_reference(l.source, buses_by_name, 'TransmissionLine', l.name, sc)
            _check_bus_reference(l.target, buses_by_name, 'TransmissionLine', l.name, sc)
            if l.source is l.target:
                raise ConfigurationError("TransmissionLine {} connects bus {} to itself".format(l.name, l.source.name))
            if not l.reactance:
                raise ConfigurationError("TransmissionLine {} must have a non-zero reactance".format(l.name))

        _check_unique_names([g.name for g in sc.thermal_units], "thermal unit", sc)
        for g in sc.thermal_units:
            _check_time_series(g, "ThermalUnit {}".format(g.name), T)
            _check_bus_reference(g.bus, buses_by_name, 'ThermalUnit', g.name, sc)
            for k, seg in enumerate(g.cost_segments, start=1):
                _check_time_series(seg, "ThermalUnit {} cost segment {}".format(g.name, k), T)
            if not g.startup_categories:
                raise ConfigurationError("ThermalUnit {} needs at least one startup category".format(g.name))
            delays = [s.delay for s in g.startup_categories]
            if any(d1 >= d2 for d1, d2 in zip(delays, delays[1:])):
                raise ConfigurationError("ThermalUnit {}: startup category delays must be strictly increasing, found {}"
                                         .format(g.name, delays))

        _check_unique_names([ps.name for ps in sc.price_sensitive_loads], "price-sensitive load", sc)
        for ps in sc.price_sensitive_loads:
            _check_time_series(ps, "PriceSensitiveLoad {}".format(ps.name), T)
            _check_bus_reference(ps.bus, buses_by_name, 'PriceSensitiveLoad', ps.name, sc)

        _check_unique_names([c.name for c in sc.contingencies], "contingency", sc)
        for c in sc.contingencies:
            if c.line is None or lines_by_name.get(c.line.name) is not c.line:
                raise ConfigurationError("Contingency {} references line {} which is not a line of scenario {}"
                                         .format(c.name, getattr(c.line, 'name', None), sc.name))

    total_probability = sum(sc.probability for sc in instance.scenarios)
    if not math.isclose(total_probability, 1.0, rel_tol=1e-6):
        logger.warning("Scenario probabilities sum to {}, not 1".format(total_probability))
