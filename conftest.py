# stdlib imports:
from typing import Callable, List, Optional as Opt, Tuple

# 3rd-party imports:
import pytest # pip install pytest

# local imports:
import auditing
from vms_directory import MailboxDirectory
from vms_mailbox import Mailbox
from vms_session import SessionController
from vms_telephone import Telephone


class FakeTelephone( Telephone ):
	def __init__( self ) -> None:
		self.spoken: List[str] = []
	
	def speak( self, text: str ) -> None:
		self.spoken.append( text )
	
	@property
	def last( self ) -> str:
		return self.spoken[-1]


class CapturingAudit( auditing.Audit ):
	def __init__( self, lines: Opt[List[Tuple[str,str]]] = None, user: str = '' ) -> None:
		self.lines: List[Tuple[str,str]] = [] if lines is None else lines
		self.user = user
		self.channel = 'test'
	
	def audit( self, msg: str ) -> None:
		self.lines.append(( self.user, msg ))
	
	def as_user( self, user: str ) -> auditing.Audit:
		return CapturingAudit( self.lines, user )


@pytest.fixture
def phone() -> FakeTelephone:
	return FakeTelephone()

@pytest.fixture
def audit() -> CapturingAudit:
	return CapturingAudit()

@pytest.fixture
def directory() -> MailboxDirectory:
	return MailboxDirectory()

@pytest.fixture
def controller( directory: MailboxDirectory, phone: FakeTelephone, audit: CapturingAudit ) -> SessionController:
	return SessionController( directory, phone, audit = audit )

@pytest.fixture
def mailbox( directory: MailboxDirectory ) -> Mailbox:
	return directory.create( '5001', '1234', audit = auditing.NoAudit() )

@pytest.fixture
def press( controller: SessionController ) -> Callable[[str],None]:
	def _press( keys: str ) -> None:
		for key in keys:
			controller.dial( key )
	return _press
