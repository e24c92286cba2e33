# stdlib imports:
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
import sys
from typing import Dict, Optional as Opt

if sys.platform != 'win32':
	try:
		from systemd.journal import JournaldLogHandler # pip install systemd
	except ImportError:
		JournaldLogHandler = None

LEVELS = ( 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL' )

def init( logfile: Opt[Path], loglevels: Dict[str,str], *, level: str = 'WARNING' ) -> None:
	assert level in LEVELS, f'invalid level={level!r}'
	logging.basicConfig(
		level = getattr( logging, level ),
		format = '%(asctime)s:%(levelname)s:%(name)s:%(message)s',
	)
	
	if sys.platform != 'win32' and JournaldLogHandler:
		journald_handler = JournaldLogHandler()
		journald_handler.setFormatter(
			logging.Formatter( '[%(levelname)s] %(message)s' )
		)
		logging.getLogger( '' ).addHandler( journald_handler )
	
	if logfile is not None:
		logfile.parent.mkdir ( parents = True, exist_ok = True )
		trfh = TimedRotatingFileHandler(
			logfile,
			when = 'D',
			interval = 1,
			backupCount = 14,
		)
		trfh.setFormatter(
			logging.Formatter( '%(asctime)s:%(levelname)s:%(name)s:%(message)s' )
		)
		logging.getLogger( '' ).addHandler( trfh )
	
	for name, lvl in loglevels.items():
		assert lvl.isnumeric() or lvl in LEVELS, f'invalid level={lvl!r}'
		logger = logging.getLogger( name )
		if lvl.isnumeric():
			logger.setLevel( int( lvl ))
		else:
			logger.setLevel( getattr( logging, lvl ))
