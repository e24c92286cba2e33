# stdlib imports:
from abc import ABCMeta, abstractmethod
import logging
from typing import TextIO, TYPE_CHECKING

# local imports:
from vms_fields import KEYPAD

if TYPE_CHECKING:
	from vms_session import SessionController

logger = logging.getLogger( __name__ )

HANGUP = 'H'
QUIT = 'Q'


class Telephone( metaclass = ABCMeta ):
	@abstractmethod
	def speak( self, text: str ) -> None:
		cls = type( self )
		raise NotImplementedError( f'{cls.__module__}.{cls.__qualname__}.speak()' )


class ConsoleTelephone( Telephone ):
	'''
	Drives a SessionController from lines of text.

	H hangs up and Q quits. A line made only of keypad characters is dialed
	one key at a time and anything else is one recorded utterance. End of
	input hangs up the call, Q does not. Spoken text goes to outfile.
	'''

	def __init__( self, infile: TextIO, outfile: TextIO ) -> None:
		self.infile = infile
		self.outfile = outfile

	def speak( self, text: str ) -> None:
		print( text, file = self.outfile )
		self.outfile.flush()

	def handle_line( self, controller: 'SessionController', line: str ) -> bool:
		log = logger.getChild( 'ConsoleTelephone.handle_line' )
		line = line.strip()
		if not line:
			return True
		cmd = line.upper()
		if cmd == QUIT:
			log.debug( 'quit requested' )
			return False
		if cmd == HANGUP:
			controller.hang_up()
		elif all( c in KEYPAD for c in line ):
			for key in line:
				controller.dial( key )
		else:
			controller.record( line )
		return True

	def run( self, controller: 'SessionController' ) -> None:
		log = logger.getChild( 'ConsoleTelephone.run' )
		for line in self.infile:
			if not self.handle_line( controller, line ):
				return
		log.debug( 'console input finished, hanging up' )
		controller.hang_up()
