#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Logging for gridx-scuc.

Every module logs through a child of the ``scuc`` logger, e.g.
``logging.getLogger('scuc.data.instance')``, or imports ``logger`` from
here. Messages at INFO and above go to stdout, unformatted, so the
progress of a model build reads like

.. code-block:: text

   Computing injection shift factors...
   Computed ISF in 0.02 seconds
   Building model...
   Built model in 0.31 seconds

Configure the ``scuc`` logger (level, handlers) to change this.
"""
import sys
import time
import logging
log_format = '%(message)s'

logger = logging.getLogger('scuc')
logger.setLevel(logging.INFO)

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(logging.Formatter(log_format))
logger.addHandler(console_handler)

def log_elapsed(what, start_time, log=logger):
    ''' logs "<what> in <seconds> seconds" since start_time, from time.time() '''
    log.info("{} in {:.2f} seconds".format(what, time.time() - start_time))
