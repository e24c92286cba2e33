# stdlib imports:
import logging
from typing import Dict, Iterator, Optional as Opt, Tuple

# local imports:
from vms_queue import CircularMessageQueue, Message, OLD_QUEUE_CAPACITY

logger = logging.getLogger( __name__ )

MAXIMUM_GREETING = 3
NEW_QUEUE_CAPACITY = 3

GREETING_NUMBERS = range( 1, MAXIMUM_GREETING + 1 )


class Mailbox:
	def __init__( self, extension: str, password: str, greeting: str, *,
		new_capacity: int = NEW_QUEUE_CAPACITY,
		old_capacity: int = OLD_QUEUE_CAPACITY,
	) -> None:
		assert extension, 'Extension can\'t be empty!'
		assert password, 'Password can\'t be empty!'
		assert greeting, 'Greeting can\'t be empty!'
		self.extension = extension
		self._password = password
		# slot number -> greeting text, None marks a hole
		self._greetings: Dict[int,Opt[str]] = { num: None for num in GREETING_NUMBERS }
		self._greetings[1] = greeting
		self._current_greeting: int = 1
		self._greetings_count: int = 1
		self.new_messages = CircularMessageQueue( new_capacity )
		self.old_messages = CircularMessageQueue( old_capacity )
	
	def __repr__( self ) -> str:
		cls = type( self )
		return f'{cls.__module__}.{cls.__qualname__}(extension={self.extension!r})'
	
	#region passwords
	
	def check_password( self, password: str ) -> bool:
		return self._password == password
	
	def set_password( self, password: str ) -> None:
		assert password, 'Password can\'t be empty!'
		self._password = password
	
	#endregion passwords
	#region greetings
	
	def current_greeting( self ) -> str:
		greeting = self._greetings[self._current_greeting]
		assert greeting is not None
		return greeting
	
	def current_greeting_number( self ) -> int:
		return self._current_greeting
	
	def greetings_count( self ) -> int:
		return self._greetings_count
	
	def specific_greeting( self, num: int ) -> Opt[str]:
		assert num in GREETING_NUMBERS, f'Greeting number invalid: {num!r}'
		return self._greetings[num]
	
	def occupied_greetings( self ) -> Iterator[Tuple[int,str]]:
		for num in GREETING_NUMBERS:
			greeting = self._greetings[num]
			if greeting is not None:
				yield num, greeting
	
	def switch_greeting( self, num: int ) -> None:
		assert num in GREETING_NUMBERS, f'Greeting number invalid: {num!r}'
		assert self._greetings[num] is not None, f'Greeting {num!r} does not exist'
		self._current_greeting = num
	
	def record_greeting( self, greeting: str ) -> None:
		log = logger.getChild( 'Mailbox.record_greeting' )
		assert greeting, 'Greeting can\'t be empty!'
		for num in GREETING_NUMBERS:
			if self._greetings[num] is None:
				self._greetings[num] = greeting
				self._greetings_count += 1
				return
		log.warning( 'mailbox %r already has %r greetings, ignoring new one', self.extension, MAXIMUM_GREETING )
	
	def delete_greeting( self, num: int ) -> None:
		assert num in GREETING_NUMBERS and num != self._current_greeting, f'Greeting number invalid: {num!r}'
		assert self._greetings[num] is not None, f'Greeting {num!r} does not exist'
		self._greetings[num] = None
		self._greetings_count -= 1
	
	#endregion greetings
	#region messages
	
	def new_size( self ) -> int:
		return self.new_messages.size()
	
	def old_size( self ) -> int:
		return self.old_messages.size()
	
	def is_new_full( self ) -> bool:
		return self.new_messages.is_full()
	
	def is_old_full( self ) -> bool:
		return self.old_messages.is_full()
	
	def new_front( self ) -> str:
		assert self.new_size() > 0
		return self.new_messages.front().content
	
	def old_front( self ) -> str:
		assert self.old_size() > 0
		return self.old_messages.front().content
	
	def record_new_message( self, content: str ) -> None:
		assert content
		assert not self.new_messages.is_full()
		self.new_messages.add( Message( content ))
	
	def save_new_message( self ) -> None:
		assert self.new_size() > 0
		assert not self.old_messages.is_full()
		self.old_messages.add( self.new_messages.remove() )
	
	def remove_new_message( self ) -> None:
		assert self.new_size() > 0
		self.new_messages.remove()
	
	def remove_old_message( self ) -> None:
		assert self.old_size() > 0
		self.old_messages.remove()
	
	def current_message( self ) -> str:
		assert self.old_size() > 0
		return self.old_messages.current().content
	
	def reset_current_message( self ) -> None:
		self.old_messages.reset_current()
	
	def advance_current_message( self ) -> None:
		self.old_messages.advance_current()
	
	#endregion messages
