#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This module collects some helper functions useful for computing the
linear (DC) sensitivities of line flows to bus injections and to
line outages
"""
import numpy as np
import scipy.sparse as sp
import scipy.sparse.csgraph
import networkx as nx

from scuc.common.log import logger
from scuc.model_library.defn import ConfigurationError

## outages with 1 - PTDF[c,c] below this value split the network
_islanding_tol = 1.e-8

def _bus_mappings(buses, reference_bus):
    index_set_bus = [b.name for b in buses]
    mapping_bus_to_idx = {bus_n: i for i, bus_n in enumerate(index_set_bus)}
    if reference_bus is None:
        reference_bus = index_set_bus[0]
    if reference_bus not in mapping_bus_to_idx:
        raise ConfigurationError("Reference bus {} is not one of the buses".format(reference_bus))
    return index_set_bus, mapping_bus_to_idx, mapping_bus_to_idx[reference_bus]

def calculate_susceptance_matrix(lines):
    """
    Calculates the diagonal matrix of line susceptances, 1/reactance
    """
    _len_line = len(lines)
    idx = list(range(_len_line))
    data = [1./line.reactance for line in lines]

    Bd = sp.coo_matrix((data, (idx, idx)), shape=(_len_line, _len_line))
    return Bd.tocsc()

def calculate_adjacency_matrix(lines, mapping_bus_to_idx):
    """
    Calculates the line-by-bus incidence matrix where (1) marks the
    source bus and (-1) marks the target bus of a line
    """
    _len_bus = len(mapping_bus_to_idx)
    _len_line = len(lines)

    row = []
    col = []
    data = []

    for idx_row, line in enumerate(lines):
        row.append(idx_row)
        col.append(mapping_bus_to_idx[line.source.name])
        data.append(1)

        row.append(idx_row)
        col.append(mapping_bus_to_idx[line.target.name])
        data.append(-1)

    adjacency_matrix = sp.coo_matrix((data, (row, col)), shape=(_len_line, _len_bus))
    return adjacency_matrix.tocsc()

def construct_connection_graph(lines, mapping_bus_to_idx):
    _len_bus = len(mapping_bus_to_idx)

    row = []
    col = []

    for line in lines:
        row.append(mapping_bus_to_idx[line.source.name])
        col.append(mapping_bus_to_idx[line.target.name])

    data = np.ones((len(lines),), dtype=np.uint8)

    graph = sp.coo_matrix((data, (row, col)), shape=(_len_bus, _len_bus)).tocsr()

    return graph

def check_network_connection(graph, index_set_bus):
    """
    Returns True if the bus graph (see construct_connection_graph) is
    connected. Otherwise logs the buses outside the largest island
    and returns False.
    """
    n_components, labels = sp.csgraph.connected_components(csgraph=graph, directed=False, return_labels=True)
    if n_components == 1:
        return True

    sizes = np.bincount(labels)
    main_island = sizes.argmax()
    logger.warning("Network is disconnected into {} islands".format(n_components))
    for island in range(n_components):
        if island == main_island:
            continue
        buses = [ index_set_bus[idx] for idx in np.flatnonzero(labels == island) ]
        logger.warning("Buses outside the main island: {}".format(buses))
    return False

def get_islanding_lines(lines, mapping_bus_to_idx):
    """
    Gets the names of the lines whose outage disconnects the network

    Returns
    -------
    set of line names (the bridges of the network graph)
    """
    graph = nx.Graph()
    graph.add_nodes_from(range(len(mapping_bus_to_idx)))
    for line in lines:
        idx_from, idx_to = mapping_bus_to_idx[line.source.name], \
                            mapping_bus_to_idx[line.target.name]
        if graph.has_edge(idx_from, idx_to):
            graph[idx_from][idx_to]['count'] += 1
        else:
            graph.add_edge(idx_from, idx_to, count=1)

    ## a bridge made of parallel lines survives
    ## the outage of any one of them
    bridges = set()
    for idx_from, idx_to in nx.bridges(graph):
        if graph[idx_from][idx_to]['count'] == 1:
            bridges.add((idx_from, idx_to))
            bridges.add((idx_to, idx_from))

    islanding = set()
    for line in lines:
        idx_from, idx_to = mapping_bus_to_idx[line.source.name], \
                            mapping_bus_to_idx[line.target.name]
        if (idx_from, idx_to) in bridges:
            islanding.add(line.name)
    return islanding

def calculate_isf(lines, buses, reference_bus=None):
    """
    Calculates the injection shift factors, i.e., the sensitivity of
    the flow on each line to a net injection at each bus, balanced at
    the reference bus

    Parameters
    ----------
    lines: list of scuc.data.instance.TransmissionLine
        The lines, whose order gives the rows of the result
    buses: list of scuc.data.instance.Bus
        The buses, whose order gives the columns of the result
    reference_bus: str (optional)
        The name of the reference bus. If None, the first bus is used.

    Returns
    -------
        numpy.ndarray of shape (len(lines), len(buses))
    """
    index_set_bus, mapping_bus_to_idx, _ref_bus_idx = _bus_mappings(buses, reference_bus)
    _len_bus = len(index_set_bus)
    _len_line = len(lines)

    ## check if the network is connected
    graph = construct_connection_graph(lines, mapping_bus_to_idx)
    connected = check_network_connection(graph, index_set_bus)

    A = calculate_adjacency_matrix(lines, mapping_bus_to_idx)
    Bd = calculate_susceptance_matrix(lines)
    J = Bd@A
    M = A.T@J

    ref_bus_mask = np.ones(_len_bus, dtype=bool)
    ref_bus_mask[_ref_bus_idx] = False

    # M is now (A^T B_d A) with
    # row and column of reference
    # bus removed
    J0 = M[ref_bus_mask,:][:,ref_bus_mask].toarray()

    # (B_d A) with reference bus column removed
    B_dA = J[:,ref_bus_mask].toarray()

    if connected:
        try:
            ISF = np.linalg.solve(J0.T, B_dA.T).T
        except np.linalg.LinAlgError:
            logger.warning("Matrix not invertible. Calculating pseudo-inverse instead.")
            SENSI = np.linalg.pinv(J0, rcond=1e-7)
            ISF = np.matmul(B_dA, SENSI)
    else:
        logger.warning("Using pseudo-inverse method as network is disconnected")
        SENSI = np.linalg.pinv(J0, rcond=1e-7)
        ISF = np.matmul(B_dA, SENSI)

    # insert 0 column for reference bus
    ISF = np.insert(ISF, _ref_bus_idx, np.zeros(_len_line), axis=1)

    return ISF

def calculate_lodf(lines, buses, isf, reference_bus=None):
    """
    Calculates the line outage distribution factors, i.e., the fraction
    of the pre-contingency flow on an outaged line (column) which is
    redistributed onto a monitored line (row)

    The diagonal is -1. Outages which island part of the network have
    no post-contingency flow pattern; their columns are zero off the
    diagonal and a warning is logged.

    Parameters
    ----------
    lines: list of scuc.data.instance.TransmissionLine
    buses: list of scuc.data.instance.Bus
    isf: numpy.ndarray
        The (uncut) output of calculate_isf for the same lines and buses
    reference_bus: str (optional)
        Only used to validate the bus list

    Returns
    -------
        numpy.ndarray of shape (len(lines), len(lines))
    """
    index_set_bus, mapping_bus_to_idx, _ = _bus_mappings(buses, reference_bus)

    A = calculate_adjacency_matrix(lines, mapping_bus_to_idx)

    # PTDF[l,c]: flow on l caused by a transfer of 1 MW from
    # the source to the target of line c
    PTDF = np.asarray(A@isf.T).T

    denominator = 1. - np.diag(PTDF)

    islanding_lines = get_islanding_lines(lines, mapping_bus_to_idx)
    islanding = np.fromiter((line.name in islanding_lines for line in lines), bool, count=len(lines))
    islanding |= (np.abs(denominator) < _islanding_tol)

    if islanding.any():
        logger.warning("Outage of the following lines disconnects the network; "
                       "their outage distribution factors are set to zero: {}"
                       .format([line.name for line, isl in zip(lines, islanding) if isl]))

    denominator[islanding] = 1.
    LODF = PTDF / denominator[np.newaxis,:]
    LODF[:,islanding] = 0.
    np.fill_diagonal(LODF, -1.)

    return LODF
