# Carrega os módulos para registrar as tabelas no metadata
from unievent.db.base import Base  # noqa: F401

import unievent.models.college       # noqa: F401
import unievent.models.admin         # noqa: F401
import unievent.models.student       # noqa: F401
import unievent.models.event         # noqa: F401
import unievent.models.registration  # noqa: F401
import unievent.models.attendance    # noqa: F401
import unievent.models.feedback      # noqa: F401
import unievent.models.note          # noqa: F401
import unievent.models.certificate   # noqa: F401

__all__: list[str] = []
