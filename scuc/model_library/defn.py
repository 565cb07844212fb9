#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

from enum import Enum

class ConfigurationError(Exception):
    '''
    Raised when an instance cannot be formulated, e.g., a time series of the
    wrong length or a thermal unit without initial conditions
    '''
    pass

class CostCategory(Enum):
    PRODUCTION = 'production'
    NO_LOAD = 'no_load'
    STARTUP = 'startup'
    OVERFLOW = 'overflow'
    CURTAILMENT = 'curtailment'
    REVENUE = 'revenue'
