# -*- coding: latin-1 -*-
# -----------------------------------------------------------------------------
# Copyright 2009, 2017 Stephen Tiedemann <stephen.tiedemann@gmail.com>
#
# Licensed under the EUPL, Version 1.1 or - as soon they
# will be approved by the European Commission - subsequent
# versions of the EUPL (the "Licence");
# You may not use this work except in compliance with the
# Licence.
# You may obtain a copy of the Licence at:
#
# https://joinup.ec.europa.eu/software/page/eupl
#
# Unless required by applicable law or agreed to in
# writing, software distributed under the Licence is
# distributed on an "AS IS" basis,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either
# express or implied.
# See the Licence for the specific language governing
# permissions and limitations under the Licence.
# -----------------------------------------------------------------------------
from . import error                                                # noqa: F401
from . import frame                                                # noqa: F401
from . import transport                                            # noqa: F401
from . import channel                                              # noqa: F401
from . import response                                             # noqa: F401
from . import device                                               # noqa: F401
from . import mifare                                               # noqa: F401
from .device import Device, PowerMode                              # noqa: F401
from .mifare import MifareCard                                     # noqa: F401

import logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
logging.getLogger(__name__).setLevel(logging.INFO)

# METADATA ####################################################################

__version__ = "0.1.0"

__title__ = "pn53xpy"
__description__ = "Host driver for NXP PN532/PN533 contactless reader chips."
__uri__ = "https://pypi.org/project/pn53xpy/"

__author__ = "Stephen Tiedemann"
__email__ = "stephen.tiedemann@gmail.com"

__license__ = "EUPL"
__copyright__ = "Copyright (c) 2009, 2017 Stephen Tiedemann"

###############################################################################
