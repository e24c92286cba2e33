# stdlib imports:
from dataclasses import dataclass
import logging
from typing import List, Optional as Opt

logger = logging.getLogger( __name__ )

OLD_QUEUE_CAPACITY = 10


@dataclass( frozen = True )
class Message:
	content: str
	
	def __post_init__( self ) -> None:
		assert self.content, 'Message can\'t be empty!'


class CircularMessageQueue:
	'''
	Fixed capacity ring buffer of messages.
	
	Besides head and tail the queue keeps a "current" cursor used to step
	through stored messages. remove() always deletes the message under the
	cursor: it is swapped into the head slot and then dropped from the head,
	so no other slot moves. Call reset_current() first for plain FIFO removal.
	
	>>> q = CircularMessageQueue( 3 )
	>>> q.add( Message( 'a' )); q.add( Message( 'b' )); q.add( Message( 'c' ))
	>>> q.advance_current()
	>>> q.remove().content
	'b'
	>>> q.front().content, q.current().content, q.size()
	('a', 'c', 2)
	'''
	
	def __init__( self, capacity: int = OLD_QUEUE_CAPACITY ) -> None:
		assert capacity > 0, f'Capacity of the queue must be bigger than 0, got {capacity!r}'
		self._slots: List[Opt[Message]] = [ None ] * capacity
		self._count: int = 0
		self._head: int = 0
		self._tail: int = 0
		self._current: int = 0
	
	def __len__( self ) -> int:
		return self._count
	
	def __repr__( self ) -> str:
		cls = type( self )
		return f'{cls.__module__}.{cls.__qualname__}(capacity={self.capacity!r}, count={self._count!r}, head={self._head!r}, tail={self._tail!r}, current={self._current!r})'
	
	@property
	def capacity( self ) -> int:
		return len( self._slots )
	
	def size( self ) -> int:
		return self._count
	
	def is_full( self ) -> bool:
		return self._count == len( self._slots )
	
	def front( self ) -> Message:
		assert self._count > 0, 'There is no message!'
		msg = self._slots[self._head]
		assert msg is not None
		return msg
	
	def current( self ) -> Message:
		assert self._count > 0, 'There is no message!'
		msg = self._slots[self._current]
		assert msg is not None
		return msg
	
	def reset_current( self ) -> None:
		self._current = self._head
	
	def advance_current( self ) -> None:
		capacity = len( self._slots )
		if self._count == 0:
			# nothing to land on, the cursor just ticks forward once
			self._current = ( self._current + 1 ) % capacity
			return
		while True:
			self._current = ( self._current + 1 ) % capacity
			if self._slots[self._current] is not None:
				break
	
	def add( self, message: Message ) -> None:
		assert not self.is_full(), 'The message queue is already full!'
		self._slots[self._tail] = message
		self._count += 1
		self._tail = ( self._tail + 1 ) % len( self._slots )
	
	def remove( self ) -> Message:
		log = logger.getChild( 'CircularMessageQueue.remove' )
		assert self._count > 0, 'There is no message to be removed!'
		
		if self._current != self._head:
			log.debug( 'swapping current=%r into head=%r', self._current, self._head )
			self._slots[self._head], self._slots[self._current] = (
				self._slots[self._current], self._slots[self._head]
			)
		
		msg = self._slots[self._head]
		assert msg is not None
		self._slots[self._head] = None
		self._head = ( self._head + 1 ) % len( self._slots )
		self._count -= 1
		self.advance_current()
		return msg
