#!/usr/bin/env python3
#region imports

# stdlib imports:
import logging
from multiprocessing import RLock as MPLockFactory
from pathlib import Path
import sys
from typing import List, Optional as Opt, TextIO, Tuple

# local imports:
import auditing
from vms_directory import MailboxDirectory
from vms_fields import ValidationError
import vms_logging
from vms_session import SessionController
import vms_settings
from vms_telephone import ConsoleTelephone

#endregion imports
#region globals

logger = logging.getLogger( __name__ )

DEFAULT_SETTINGS_PATH = Path( '/etc/itas/vms/settings.json' )

g_settings_mplock = MPLockFactory()

#endregion globals
#region bootstrap


def build( settings: vms_settings.Settings, infile: TextIO, outfile: TextIO ) -> Tuple[ConsoleTelephone,SessionController]:
	if settings.audit_path:
		auditing.init(
			Path( settings.audit_path ),
			settings.audit_file,
			settings.audit_time_format,
		)
		audit: auditing.Audit = auditing.Audit( user = 'console', channel = 'console' )
	else:
		audit = auditing.NoAudit()
	
	directory = MailboxDirectory(
		new_capacity = settings.new_message_capacity,
		old_capacity = settings.old_message_capacity,
	)
	phone = ConsoleTelephone( infile, outfile )
	controller = SessionController( directory, phone,
		attendant_code = settings.attendant_code,
		admin_code = settings.admin_code,
		system_name = settings.system_name,
		audit = audit,
	)
	return phone, controller

def main( argv: List[str], infile: Opt[TextIO] = None, outfile: Opt[TextIO] = None ) -> int:
	settings_path = Path( argv[0] ) if argv else DEFAULT_SETTINGS_PATH
	vms_settings.init( settings_path, g_settings_mplock )
	settings = vms_settings.load()
	try:
		vms_settings.validate( settings )
	except ValidationError as e:
		print( f'invalid settings in {str( settings_path )!r}: {e}', file = sys.stderr )
		return 2
	
	vms_logging.init(
		Path( settings.logfile ) if settings.logfile else None,
		settings.loglevels,
		level = settings.loglevel,
	)
	logger.info( 'starting with settings from %r', str( settings_path ))
	
	phone, controller = build( settings, infile or sys.stdin, outfile or sys.stdout )
	phone.run( controller )
	return 0

def run() -> None:
	sys.exit( main( sys.argv[1:] ))


#endregion bootstrap

if __name__ == '__main__':
	run()
