# speclab/__init__.py
from .errors import SpecLabError, RecordStructureError, HeaderError, NonSpectralRecordError
from .config import ConvertConfig, load_config
from .header import FileType, change_header, check_header, get_enum_desc
from .io.record import SpectralRecord, check_records
from .io.network import from_network, to_network
from .transforms.spectral import rlim2amph, amph2rlim, dep_stats
from .transforms import TComposite

__version__ = "0.1.0"
