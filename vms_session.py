#region imports

# stdlib imports:
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, Optional as Opt
from typing_extensions import Final # pip install typing-extensions

# local imports:
import auditing
from vms_directory import MailboxDirectory
from vms_fields import KEYPAD
from vms_mailbox import GREETING_NUMBERS, Mailbox, MAXIMUM_GREETING
from vms_telephone import Telephone

#endregion imports
#region globals

logger = logging.getLogger( __name__ )

TERMINATOR: Final = '#'
ATTENDANT_CODE: Final = '123456789'
ADMIN_CODE: Final = '21120109'
SYSTEM_NAME: Final = 'the voicemail system'

MAILBOX_RETRIEVE = '1'
MAILBOX_PASSWORD = '2'
MAILBOX_GREETINGS = '3'

OLD_REPLAY = '1'
OLD_DELETE = '2'
OLD_NEXT = '3'
OLD_RETURN = '4'

NEW_REPLAY = '1'
NEW_SAVE = '2'
NEW_DELETE = '3'
NEW_RETURN = '4'

GREETING_SWITCH = '1'
GREETING_RECORD = '2'
GREETING_DELETE = '3'
GREETING_RETURN = '4'

ADMIN_CREATE = '1'
ADMIN_PASSWORD = '2'
ADMIN_RESET = '3'

MAILBOX_MENU_TEXT: Final = (
	'\nMAILBOX MENU:\n'
	'Enter 1 to retrieve your messages\n'
	'Enter 2 to change your password\n'
	'Enter 3 to manage your greetings\n'
)

OLD_MESSAGE_MENU_TEXT: Final = (
	'\nMESSAGE MENU:\n'
	'Enter 1 to listen to this message again\n'
	'Enter 2 to delete this message\n'
	'Enter 3 to listen to next message\n'
	'Enter 4 to back to the previous menu\n'
)

NEW_MESSAGE_MENU_TEXT: Final = (
	'\nMESSAGE MENU:\n'
	'Enter 1 to listen to this message again\n'
	'Enter 2 to save this message\n'
	'Enter 3 to delete this message\n'
	'Enter 4 to back to the previous menu\n'
)

GREETING_MENU_TEXT: Final = (
	'\nGREETING MENU:\n'
	'Enter 1 to switch your greeting\n'
	'Enter 2 to record a new greeting\n'
	'Enter 3 to delete one of your greetings\n'
	'Enter 4 to back to the previous menu\n'
)

ADMIN_MENU_TEXT: Final = (
	'\nADMINISTRATOR MENU:\n'
	'Enter 1 to create a new mailbox\n'
	'Enter 2 to change a mailbox password\n'
	'Enter 3 to reset all mailboxes passwords\n'
)

INVALID_KEY = 'Invalid key. Please enter again.\n'
FOLLOW_INSTRUCTION = 'Please follow instruction!\n'
ENTER_KEY_BEFORE_TERMINATOR = '\nPlease enter key before #'
UNKNOWN_COMMAND = '\nThe system doesn\'t understand your command. Please try again\n'
MAILBOX_DOES_NOT_EXIST = '\nThis mailbox does not exist. Please try a different one!\n'
MAILBOX_FULL = '\nThis mailbox can\'t receive any new message. Please come back at another time\n'
INCORRECT_PASSWORD = '\nIncorrect password. Try again!\n'
GREETING_DOES_NOT_EXIST = '\nThe greeting you choose doesn\'t exist. Please choose a different one\n'


class VmState( Enum ):
	IDLE = 'idle'
	CONNECTED = 'connected'
	RECORDING = 'recording'
	LOG_IN = 'log_in'
	MAILBOX_MENU = 'mailbox_menu'
	OLD_MESSAGE_MENU = 'old_message_menu'
	NEW_MESSAGE_MENU = 'new_message_menu'
	OWNER_CHANGE_PASSWORD = 'owner_change_password'
	GREETING_MENU = 'greeting_menu'
	SWITCH_GREETING = 'switch_greeting'
	RECORD_GREETING = 'record_greeting'
	DELETE_GREETING = 'delete_greeting'
	ADMIN_MENU = 'admin_menu'
	CREATE_EXTENSION = 'create_extension'
	CREATE_PASSWORD = 'create_password'
	FIND_EXTENSION = 'find_extension'
	ADMIN_CHANGE_PASSWORD = 'admin_change_password'


@dataclass
class Session:
	state: VmState = VmState.IDLE
	extension: str = '' # addressed mailbox
	digits: str = '' # keys collected until the terminator
	recording: str = '' # audio collected until hang up or terminator


#endregion globals
#region SessionController


class SessionController:
	'''
	Interprets the key presses and recorded audio of the one active call.

	Every dial() is routed to the _on_<state> method of the current state.
	Bad input from the caller never raises: it is answered with a spoken
	prompt and the session stays in (or returns to) a well-defined state.
	'''

	def __init__( self, directory: MailboxDirectory, phone: Telephone, *,
		attendant_code: str = ATTENDANT_CODE,
		admin_code: str = ADMIN_CODE,
		system_name: str = SYSTEM_NAME,
		audit: Opt[auditing.Audit] = None,
	) -> None:
		self.directory = directory
		self.phone = phone
		self.attendant_code = attendant_code
		self.admin_code = admin_code
		self.system_name = system_name
		self.audit: auditing.Audit = audit or auditing.NoAudit()
		self.session = Session()
		self._reset()
		self.phone.speak(
			f'Welcome to {system_name}\n'
			'Please log in as an administrator first to create the first mailbox to test the system\n'
			'Ready to receive command'
		)

	@property
	def state( self ) -> VmState:
		return self.session.state

	#region events

	def hang_up( self ) -> None:
		log = logger.getChild( 'SessionController.hang_up' )
		session = self.session
		if session.state == VmState.RECORDING and session.recording != '':
			log.info( 'leaving %r character message in mailbox %r', len( session.recording ), session.extension )
			self._box().record_new_message( session.recording )
		self._reset()

	def record( self, voice: str ) -> None:
		log = logger.getChild( 'SessionController.record' )
		assert voice, 'recorded audio can\'t be empty'
		if self.session.state in ( VmState.RECORDING, VmState.RECORD_GREETING ):
			self.session.recording += voice + '\n'
		else:
			log.info( 'ignoring audio in state %s', self.session.state.name )
			self.phone.speak( FOLLOW_INSTRUCTION )

	def dial( self, key: str ) -> None:
		log = logger.getChild( 'SessionController.dial' )
		assert len( key ) == 1 and key in KEYPAD, f'invalid key={key!r}'
		log.debug( 'state=%s key=%r', self.session.state.name, key )
		handler: Callable[[str],None] = getattr( self, f'_on_{self.session.state.value}' )
		handler( key )

	#endregion events
	#region helpers

	def _reset( self ) -> None:
		self.session = Session()
		self.phone.speak( f'\nWelcome to {self.system_name}. Ready to receive command' )

	def _goto( self, state: VmState ) -> None:
		log = logger.getChild( 'SessionController._goto' )
		log.debug( '%s -> %s', self.session.state.name, state.name )
		self.session.state = state

	def _box( self ) -> Mailbox:
		return self.directory.get( self.session.extension )

	def _collect( self, key: str, empty_prompt: str = ENTER_KEY_BEFORE_TERMINATOR ) -> Opt[str]:
		# returns the collected keys once the terminator arrives with something to show for it
		session = self.session
		if key != TERMINATOR:
			session.digits += key
			return None
		digits, session.digits = session.digits, ''
		if digits == '':
			self.phone.speak( empty_prompt )
			return None
		return digits

	def _invalid_key( self, key: str ) -> None:
		log = logger.getChild( 'SessionController._invalid_key' )
		log.info( 'invalid key %r in state %s', key, self.session.state.name )
		self.phone.speak( INVALID_KEY )

	def _speak_greetings( self, box: Mailbox ) -> None:
		for num, greeting in box.occupied_greetings():
			self.phone.speak( f'\nGreeting {num}:\n{greeting}' )

	@staticmethod
	def _greeting_number( key: str ) -> Opt[int]:
		if key.isdigit() and int( key ) in GREETING_NUMBERS:
			return int( key )
		return None

	#endregion helpers
	#region caller states

	def _on_idle( self, key: str ) -> None:
		log = logger.getChild( 'SessionController._on_idle' )
		digits = self._collect( key )
		if digits is None:
			return
		if digits == self.attendant_code:
			self._goto( VmState.CONNECTED )
			self.phone.speak( '\nWelcome. Please enter the extension number you want to reach' )
		elif self.directory.exists( digits ):
			self.session.extension = digits
			self._goto( VmState.LOG_IN )
			self.phone.speak( '\nWelcome to your mailbox. Please enter your password' )
		elif digits == self.admin_code:
			self._goto( VmState.ADMIN_MENU )
			self.phone.speak( '\nWelcome, admin\n' + ADMIN_MENU_TEXT )
		else:
			log.info( 'unrecognized command %r', digits )
			self.phone.speak( UNKNOWN_COMMAND )

	def _on_connected( self, key: str ) -> None:
		log = logger.getChild( 'SessionController._on_connected' )
		digits = self._collect( key )
		if digits is None:
			return
		if not self.directory.exists( digits ):
			log.info( 'caller dialed unknown extension %r', digits )
			self.phone.speak( MAILBOX_DOES_NOT_EXIST )
			return
		self.session.extension = digits
		box = self._box()
		if box.is_new_full():
			log.info( 'mailbox %r is full, dropping caller', digits )
			self.phone.speak( MAILBOX_FULL )
			self._reset()
			return
		self._goto( VmState.RECORDING )
		self.phone.speak( '\n' + box.current_greeting() )

	def _on_recording( self, key: str ) -> None:
		# the caller is talking, keys mean nothing until they hang up
		pass

	#endregion caller states
	#region owner states

	def _on_log_in( self, key: str ) -> None:
		log = logger.getChild( 'SessionController._on_log_in' )
		digits = self._collect( key )
		if digits is None:
			return
		if self._box().check_password( digits ):
			self._goto( VmState.MAILBOX_MENU )
			self.phone.speak( '\nLog in successfully\n' + MAILBOX_MENU_TEXT )
		else:
			log.info( 'incorrect password for mailbox %r', self.session.extension )
			self.phone.speak( INCORRECT_PASSWORD )

	def _on_mailbox_menu( self, key: str ) -> None:
		box = self._box()
		if key == MAILBOX_RETRIEVE:
			if box.old_size() == 0 and box.new_size() == 0:
				self.phone.speak(
					'\nThere is no message in your mailbox. Please come back at another time\n'
					+ MAILBOX_MENU_TEXT
				)
			elif box.new_size() == 0:
				box.reset_current_message()
				self._goto( VmState.OLD_MESSAGE_MENU )
				self.phone.speak(
					f'\nThere is no new message. You have {box.old_size()} old message(s).\n\n'
					f'First old message:\n\n{box.old_front()}{OLD_MESSAGE_MENU_TEXT}'
				)
			else:
				self._goto( VmState.NEW_MESSAGE_MENU )
				self.phone.speak(
					f'\nYou have {box.new_size()} new message(s).\n\n'
					f'First new message:\n\n{box.new_front()}{NEW_MESSAGE_MENU_TEXT}'
				)
		elif key == MAILBOX_PASSWORD:
			self._goto( VmState.OWNER_CHANGE_PASSWORD )
			self.phone.speak( '\nEnter new password followed by the # key' )
		elif key == MAILBOX_GREETINGS:
			self._goto( VmState.GREETING_MENU )
			self.phone.speak( f'\nYou have {box.greetings_count()} greeting(s).\n{GREETING_MENU_TEXT}' )
		else:
			self._invalid_key( key )

	def _on_old_message_menu( self, key: str ) -> None:
		box = self._box()
		if key == OLD_REPLAY:
			self.phone.speak( '\n' + box.current_message() + OLD_MESSAGE_MENU_TEXT )
		elif key == OLD_DELETE:
			box.remove_old_message()
			if box.old_size() != 0:
				self.phone.speak(
					'\nMessage deleted successfully\n\n'
					f'Next old message:\n\n{box.current_message()}{OLD_MESSAGE_MENU_TEXT}'
				)
			else:
				self._goto( VmState.MAILBOX_MENU )
				self.phone.speak(
					'\nMessage deleted successfully\n\n'
					'You have no old message left\n' + MAILBOX_MENU_TEXT
				)
		elif key == OLD_NEXT:
			box.advance_current_message()
			self.phone.speak( f'\nNext old message:\n{box.current_message()}{OLD_MESSAGE_MENU_TEXT}' )
		elif key == OLD_RETURN:
			self._goto( VmState.MAILBOX_MENU )
			self.phone.speak( MAILBOX_MENU_TEXT )
		else:
			self._invalid_key( key )

	def _on_new_message_menu( self, key: str ) -> None:
		log = logger.getChild( 'SessionController._on_new_message_menu' )
		box = self._box()
		if key == NEW_REPLAY:
			self.phone.speak( '\n' + box.new_front() + NEW_MESSAGE_MENU_TEXT )
		elif key in ( NEW_SAVE, NEW_DELETE ):
			if key == NEW_SAVE:
				if box.is_old_full():
					log.info( 'old messages of mailbox %r are full, cannot save', self.session.extension )
					self.phone.speak(
						'\nYour saved messages are full. Please delete an old message first\n'
						+ NEW_MESSAGE_MENU_TEXT
					)
					return
				box.save_new_message()
				done = '\nMessage saved successfully\n\n'
			else:
				box.remove_new_message()
				done = '\nMessage deleted successfully\n\n'
			if box.new_size() != 0:
				self.phone.speak( f'{done}Next new message:\n\n{box.new_front()}{NEW_MESSAGE_MENU_TEXT}' )
			else:
				self._goto( VmState.MAILBOX_MENU )
				self.phone.speak( f'{done}You have no new message left\n{MAILBOX_MENU_TEXT}' )
		elif key == NEW_RETURN:
			self._goto( VmState.MAILBOX_MENU )
			self.phone.speak( MAILBOX_MENU_TEXT )
		else:
			self._invalid_key( key )

	def _on_owner_change_password( self, key: str ) -> None:
		digits = self._collect( key, 'Password can\'t be empty. Please enter new password again.\n' )
		if digits is None:
			return
		extension = self.session.extension
		self.directory.set_password( extension, digits, audit = self.audit.as_user( f'owner:{extension}' ))
		self._goto( VmState.MAILBOX_MENU )
		self.phone.speak( '\nPassword changed successfully\n' + MAILBOX_MENU_TEXT )

	#endregion owner states
	#region greeting states

	def _on_greeting_menu( self, key: str ) -> None:
		box = self._box()
		count = box.greetings_count()
		if key == GREETING_SWITCH:
			if count == 1:
				self.phone.speak(
					'\nYou only have 1 greeting. Please record a new one first to switch\n'
					+ GREETING_MENU_TEXT
				)
			else:
				self._goto( VmState.SWITCH_GREETING )
				self._speak_greetings( box )
				self.phone.speak( 'Enter the number of the greeting you want to switch to:' )
		elif key == GREETING_RECORD:
			if count == MAXIMUM_GREETING:
				self.phone.speak(
					f'\nYou have reached maximum of {MAXIMUM_GREETING} greetings. To record a new one, '
					'please delete an existing greeting first\n' + GREETING_MENU_TEXT
				)
			else:
				self.session.recording = ''
				self._goto( VmState.RECORD_GREETING )
				self.phone.speak( '\nRecord your greeting, then press #' )
		elif key == GREETING_DELETE:
			if count == 1:
				self.phone.speak(
					'\nYou can\'t delete your only greeting. To delete this greeting, '
					'please record a new one first\n' + GREETING_MENU_TEXT
				)
			else:
				self._goto( VmState.DELETE_GREETING )
				self._speak_greetings( box )
				self.phone.speak( 'Enter the number of the greeting you want to delete:' )
		elif key == GREETING_RETURN:
			self._goto( VmState.MAILBOX_MENU )
			self.phone.speak( MAILBOX_MENU_TEXT )
		else:
			self._invalid_key( key )

	def _on_switch_greeting( self, key: str ) -> None:
		box = self._box()
		num = self._greeting_number( key )
		if num is None:
			self._invalid_key( key )
		elif box.specific_greeting( num ) is None:
			self.phone.speak( GREETING_DOES_NOT_EXIST )
		else:
			box.switch_greeting( num )
			self._goto( VmState.GREETING_MENU )
			self.phone.speak( '\nGreeting switched successfully\n' + GREETING_MENU_TEXT )

	def _on_record_greeting( self, key: str ) -> None:
		if key != TERMINATOR:
			return
		if self.session.recording == '':
			self.phone.speak( 'Greeting can\'t be empty. Please record your greeting again.\n' )
			return
		self._box().record_greeting( self.session.recording )
		self.session.recording = ''
		self._goto( VmState.GREETING_MENU )
		self.phone.speak( '\nGreeting recorded successfully\n' + GREETING_MENU_TEXT )

	def _on_delete_greeting( self, key: str ) -> None:
		box = self._box()
		num = self._greeting_number( key )
		if num is None:
			self._invalid_key( key )
		elif num == box.current_greeting_number():
			self._goto( VmState.GREETING_MENU )
			self.phone.speak(
				'\nYou can\'t delete your currently used greeting. To delete this'
				' greeting, please switch to another one first\n' + GREETING_MENU_TEXT
			)
		elif box.specific_greeting( num ) is None:
			self.phone.speak( GREETING_DOES_NOT_EXIST )
		else:
			box.delete_greeting( num )
			self._goto( VmState.GREETING_MENU )
			self.phone.speak( '\nGreeting deleted successfully\n' + GREETING_MENU_TEXT )

	#endregion greeting states
	#region admin states

	def _on_admin_menu( self, key: str ) -> None:
		if key == ADMIN_CREATE:
			self._goto( VmState.CREATE_EXTENSION )
			self.phone.speak( '\nEnter the extension number for the new mailbox:' )
		elif key == ADMIN_PASSWORD:
			self._goto( VmState.FIND_EXTENSION )
			self.phone.speak( '\nEnter the mailbox extension you want to change password:' )
		elif key == ADMIN_RESET:
			if self.directory.size() > 0:
				self.directory.reset_passwords( audit = self.audit.as_user( 'admin' ))
				self.phone.speak(
					'\nAll mailboxes passwords have been set to default, '
					'which are the same as their extension number\n' + ADMIN_MENU_TEXT
				)
			else:
				self.phone.speak(
					'\nThere is no mailbox in the system. Please create a mailbox first\n'
					+ ADMIN_MENU_TEXT
				)
		else:
			self._invalid_key( key )

	def _on_create_extension( self, key: str ) -> None:
		digits = self._collect( key, '\nExtension can\'t be empty. Please enter again\n' )
		if digits is None:
			return
		if self.directory.exists( digits ):
			self._goto( VmState.ADMIN_MENU )
			self.phone.speak(
				'\nThis extension already existed. Please create a different extension\n'
				+ ADMIN_MENU_TEXT
			)
		else:
			self.session.extension = digits
			self._goto( VmState.CREATE_PASSWORD )
			self.phone.speak( '\nEnter the password for the new mailbox:' )

	def _on_create_password( self, key: str ) -> None:
		digits = self._collect( key, '\nPassword can\'t be empty. Please enter the password again\n' )
		if digits is None:
			return
		self.directory.create( self.session.extension, digits, audit = self.audit.as_user( 'admin' ))
		self._goto( VmState.ADMIN_MENU )
		self.phone.speak( '\nNew mailbox created successfully\n' + ADMIN_MENU_TEXT )

	def _on_find_extension( self, key: str ) -> None:
		digits = self._collect( key )
		if digits is None:
			return
		if self.directory.exists( digits ):
			self.session.extension = digits
			self._goto( VmState.ADMIN_CHANGE_PASSWORD )
			self.phone.speak( '\nEnter new password for this mailbox:' )
		else:
			self.phone.speak( MAILBOX_DOES_NOT_EXIST )

	def _on_admin_change_password( self, key: str ) -> None:
		digits = self._collect( key, '\nPassword can\'t be empty. Please enter new password again\n' )
		if digits is None:
			return
		self.directory.set_password( self.session.extension, digits, audit = self.audit.as_user( 'admin' ))
		self._goto( VmState.ADMIN_MENU )
		self.phone.speak( '\nPassword changed successfully\n' + ADMIN_MENU_TEXT )

	#endregion admin states


#endregion SessionController
