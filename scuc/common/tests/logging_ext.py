#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

import sys
import logging
import scuc.models.unit_commitment

logger = logging.getLogger('scuc.models.unit_commitment')

getattr(logger, sys.argv[1])(sys.argv[2])
