# stdlib imports:
import logging
from typing import Dict, Iterator, List

# local imports:
import auditing
from vms_mailbox import Mailbox, NEW_QUEUE_CAPACITY, OLD_QUEUE_CAPACITY

logger = logging.getLogger( __name__ )


class ResourceAlreadyExists( Exception ):
	pass

class ResourceNotFound( Exception ):
	pass


def default_greeting( extension: str ) -> str:
	return f'You have reached mailbox {extension}.\nPlease leave your message now.\n'


class MailboxDirectory:
	'''
	In-memory mailbox store keyed by extension.
	
	Every mailbox lives only as long as the process; list() and iteration
	always return mailboxes sorted by extension string ordering.
	'''
	
	def __init__( self, *,
		new_capacity: int = NEW_QUEUE_CAPACITY,
		old_capacity: int = OLD_QUEUE_CAPACITY,
	) -> None:
		self.new_capacity = new_capacity
		self.old_capacity = old_capacity
		self._boxes: Dict[str,Mailbox] = {}
	
	def __len__( self ) -> int:
		return len( self._boxes )
	
	def __iter__( self ) -> Iterator[Mailbox]:
		return iter( self.list() )
	
	def size( self ) -> int:
		return len( self._boxes )
	
	def exists( self, extension: str ) -> bool:
		return extension in self._boxes
	
	def get( self, extension: str ) -> Mailbox:
		try:
			return self._boxes[extension]
		except KeyError:
			raise ResourceNotFound( f'Mailbox {extension!r} does not exist' ) from None
	
	def list( self ) -> List[Mailbox]:
		return [ self._boxes[ext] for ext in sorted( self._boxes ) ]
	
	def create( self, extension: str, password: str, *, audit: auditing.Audit ) -> Mailbox:
		log = logger.getChild( 'MailboxDirectory.create' )
		assert extension, 'Extension can\'t be empty!'
		assert password, 'Password can\'t be empty!'
		if extension in self._boxes:
			raise ResourceAlreadyExists( f'Mailbox {extension!r} already exists' )
		box = Mailbox( extension, password, default_greeting( extension ),
			new_capacity = self.new_capacity,
			old_capacity = self.old_capacity,
		)
		self._boxes[extension] = box
		log.info( 'created mailbox %r', extension )
		audit.audit( f'created mailbox {extension!r}' )
		return box
	
	def set_password( self, extension: str, password: str, *, audit: auditing.Audit ) -> None:
		log = logger.getChild( 'MailboxDirectory.set_password' )
		assert password, 'Password can\'t be empty!'
		self.get( extension ).set_password( password )
		log.info( 'password changed for mailbox %r', extension )
		audit.audit( f'changed password of mailbox {extension!r}' )
	
	def reset_passwords( self, *, audit: auditing.Audit ) -> None:
		log = logger.getChild( 'MailboxDirectory.reset_passwords' )
		assert self._boxes, 'There is no mailbox in the system!'
		for box in self.list():
			box.set_password( box.extension )
		log.info( 'reset passwords of %r mailbox(es)', len( self._boxes ))
		audit.audit( f'reset passwords of {len( self._boxes )!r} mailbox(es) to their extensions' )
