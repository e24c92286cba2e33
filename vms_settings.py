# stdlib imports:
from dataclasses import asdict, dataclass, field, fields
import json
import logging
from multiprocessing.synchronize import RLock as MPLock
from mypy_extensions import TypedDict # pip install mypy-extensions
from pathlib import Path
from typing import Dict
from typing_extensions import Literal # pip install typing-extensions

# local imports:
from vms_fields import Field, IntField, ValidationError
from vms_logging import LEVELS

logger = logging.getLogger( __name__ )

LOGLEVEL = Literal['DEBUG','INFO','WARNING','ERROR','CRITICAL']

g_settings_path: Path
g_lock: MPLock


class SettingMeta( TypedDict ):
	description: str
	field: Field

@dataclass
class Settings:
	system_name: str = field( default = 'the voicemail system', metadata = SettingMeta(
		description = 'Name spoken in the welcome prompt',
		field = Field( 'System Name', required = True, max_length = 80 ),
	))
	attendant_code: str = field( default = '123456789', metadata = SettingMeta(
		description = 'Code callers dial to reach the attendant',
		field = Field( 'Attendant Code', required = True, keypad = True ),
	))
	admin_code: str = field( default = '21120109', metadata = SettingMeta(
		description = 'Code that opens the administrator menu',
		field = Field( 'Admin Code', required = True, keypad = True ),
	))
	new_message_capacity: int = field( default = 3, metadata = SettingMeta(
		description = 'New messages a mailbox holds before refusing callers',
		field = IntField( 'New Message Capacity', min = 1, max = 100 ),
	))
	old_message_capacity: int = field( default = 10, metadata = SettingMeta(
		description = 'Saved messages a mailbox holds',
		field = IntField( 'Old Message Capacity', min = 1, max = 1000 ),
	))
	logfile: str = field( default = '', metadata = SettingMeta(
		description = 'Rotating log file, empty to log to stderr only',
		field = Field( 'Log File' ),
	))
	loglevel: LOGLEVEL = field( default = 'WARNING', metadata = SettingMeta(
		description = 'Root log level',
		field = Field( 'Log Level', required = True ),
	))
	loglevels: Dict[str,str] = field( default_factory = dict, metadata = SettingMeta(
		description = 'Per-logger level overrides',
		field = Field( 'Log Levels' ),
	))
	audit_path: str = field( default = '', metadata = SettingMeta(
		description = 'Audit trail directory, empty to disable auditing',
		field = Field( 'Audit Path' ),
	))
	audit_file: str = field( default = 'vms-%Y-%m-%d.audit', metadata = SettingMeta(
		description = 'Audit file name (strftime pattern)',
		field = Field( 'Audit File', required = True ),
	))
	audit_time_format: str = field( default = '%Y-%m-%d %H:%M:%S', metadata = SettingMeta(
		description = 'Audit line timestamp (strftime pattern)',
		field = Field( 'Audit Time Format', required = True ),
	))

def validate( settings: Settings ) -> None:
	for fld in fields( settings ):
		value = getattr( settings, fld.name )
		if isinstance( value, dict ):
			continue
		meta: SettingMeta = fld.metadata # type: ignore
		meta['field'].validate( value )
	if settings.loglevel not in LEVELS:
		raise ValidationError( f'Log Level is invalid: {settings.loglevel!r}' )
	for name, lvl in settings.loglevels.items():
		if not isinstance( lvl, str ) or not ( lvl.isnumeric() or lvl in LEVELS ):
			raise ValidationError( f'Log Levels has an invalid level for {name!r}: {lvl!r}' )
	a, b = settings.attendant_code, settings.admin_code
	if a == b:
		raise ValidationError( f'Attendant Code {a!r} and Admin Code {b!r} must be distinct' )

def init( settings_path: Path, lock: MPLock ) -> None:
	global g_settings_path, g_lock
	g_settings_path = settings_path
	g_lock = lock

def load() -> Settings:
	log = logger.getChild( 'load' )
	with g_lock:
		try:
			with g_settings_path.open( 'r' ) as f:
				return Settings( **json.loads( f.read() ))
		except FileNotFoundError:
			log.info( 'no settings at %r, writing defaults', str( g_settings_path ))
		settings = Settings()
		save( settings )
		return settings

def save( settings: Settings ) -> None:
	with g_lock:
		g_settings_path.parent.mkdir( parents = True, exist_ok = True )
		with g_settings_path.open( 'w' ) as f:
			f.write( json.dumps(
				asdict( settings ),
				indent = 1, # make it a bit more human-readable just in case
			))
