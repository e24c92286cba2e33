# stdlib imports:
import doctest
from typing import List

# 3rd-party imports:
import pytest # pip install pytest

# local imports:
import vms_queue
from vms_queue import CircularMessageQueue, Message


def _filled( *contents: str, capacity: int = 3 ) -> CircularMessageQueue:
	q = CircularMessageQueue( capacity )
	for content in contents:
		q.add( Message( content ))
	return q

def _drain( q: CircularMessageQueue ) -> List[str]:
	out: List[str] = []
	while q.size():
		q.reset_current()
		out.append( q.remove().content )
	return out


def test_docstring_examples() -> None:
	fail_count, test_count = doctest.testmod( vms_queue )
	assert test_count > 0
	assert not fail_count

def test_message_requires_content() -> None:
	with pytest.raises( AssertionError ):
		Message( '' )

def test_capacity_must_be_positive() -> None:
	with pytest.raises( AssertionError ):
		CircularMessageQueue( 0 )

def test_default_capacity_is_old_queue_capacity() -> None:
	assert CircularMessageQueue().capacity == 10

def test_size_tracks_adds_and_removes() -> None:
	q = CircularMessageQueue( 3 )
	assert q.size() == 0 and len( q ) == 0
	q.add( Message( 'a' ))
	q.add( Message( 'b' ))
	assert q.size() == 2
	q.remove()
	assert q.size() == 1
	q.add( Message( 'c' ))
	q.add( Message( 'd' ))
	assert q.size() == 3
	assert q.is_full()

def test_add_to_full_queue_is_rejected() -> None:
	q = _filled( 'a', 'b', 'c' )
	with pytest.raises( AssertionError ):
		q.add( Message( 'd' ))
	assert q.size() == 3

def test_empty_queue_access_is_rejected() -> None:
	q = CircularMessageQueue( 3 )
	with pytest.raises( AssertionError ):
		q.front()
	with pytest.raises( AssertionError ):
		q.current()
	with pytest.raises( AssertionError ):
		q.remove()

def test_remove_after_reset_is_fifo() -> None:
	for steps in range( 4 ):
		q = _filled( 'a', 'b', 'c' )
		for _ in range( steps ):
			q.advance_current()
		expected = q.front()
		q.reset_current()
		assert q.remove() == expected

def test_remove_takes_the_current_message() -> None:
	q = _filled( 'a', 'b', 'c' )
	q.advance_current()
	q.advance_current()
	assert q.current().content == 'c'
	assert q.remove().content == 'c'
	# the former head now sits where 'c' was
	assert q.front().content == 'b'
	assert q.current().content == 'b'
	assert _drain( q ) == [ 'b', 'a' ]

def test_cursor_skips_past_removed_slot() -> None:
	q = _filled( 'a', 'b', 'c' )
	q.advance_current()
	assert q.remove().content == 'b'
	assert q.front().content == 'a'
	assert q.current().content == 'c'

def test_cursor_wraps_around() -> None:
	q = _filled( 'a', 'b', 'c' )
	q.remove()
	q.add( Message( 'd' ))
	seen = []
	for _ in range( 4 ):
		seen.append( q.current().content )
		q.advance_current()
	assert seen == [ 'b', 'c', 'd', 'b' ]

def test_advance_on_empty_queue_moves_once() -> None:
	q = CircularMessageQueue( 3 )
	q.advance_current()
	q.add( Message( 'a' ))
	# cursor is off in an empty slot until it is reset
	with pytest.raises( AssertionError ):
		q.current()
	q.reset_current()
	assert q.current().content == 'a'

def test_draining_keeps_cursor_on_next_add() -> None:
	q = _filled( 'a', 'b' )
	q.remove()
	q.remove()
	assert q.size() == 0
	q.add( Message( 'c' ))
	assert q.current() == q.front() == Message( 'c' )
