# stdlib imports:
import datetime
import logging
from pathlib import Path

# 3rd-party imports:
import tzlocal # pip install tzlocal


logger = logging.getLogger( __name__ )

_path: Path
_file: str
_time_format: str

def init(
	path: Path,
	file: str,
	time_format: str,
) -> None:
	global _path, _file, _time_format
	_path = path
	_file = file
	_time_format = time_format
	
	_path.mkdir( mode = 0o770, parents = True, exist_ok = True )

class Audit:
	'''
	Appends one line per mailbox mutation to a dated file under the
	directory given to init(). The file name is a strftime() pattern.
	'''
	def __init__( self, *, user: str, channel: str ) -> None:
		self.user = user
		self.channel = channel
	
	def audit( self, msg: str ) -> None:
		tzinfo = tzlocal.get_localzone()
		now = datetime.datetime.now( tz = tzinfo )
		line = ' '.join( [
			now.strftime( _time_format ),
			self.user,
			self.channel,
			msg,
		] )
		path = _path / now.strftime( _file )
		with path.open( 'a', encoding = 'utf-8', errors = 'backslashreplace' ) as f:
			print( line, file = f )
	
	def as_user( self, user: str ) -> 'Audit':
		return Audit( user = user, channel = self.channel )

class NoAudit( Audit ):
	def __init__( self ) -> None:
		pass
	def audit( self, msg: str ) -> None:
		pass
	def as_user( self, user: str ) -> Audit:
		return self
