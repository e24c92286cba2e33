# stdlib imports:
from typing import Optional as Opt, Union

KEYPAD = '0123456789*#'


class ValidationError( Exception ):
	pass


class Field:
	def __init__( self, label: str, *,
		required: bool = False,
		max_length: Opt[int] = None,
		keypad: bool = False,
	) -> None:
		self.label = label
		self.required = required
		self.max_length = max_length
		self.keypad = keypad
	
	def validate( self, rawvalue: Union[None,int,str] ) -> Union[None,int,str]:
		if rawvalue is None or rawvalue == '':
			if self.required:
				raise ValidationError( f'{self.label} is required' )
			return rawvalue
		if not isinstance( rawvalue, str ):
			raise ValidationError( f'{self.label} must be text, got {rawvalue!r}' )
		if self.max_length is not None and len( rawvalue ) > self.max_length:
			raise ValidationError( f'{self.label} is too long, max length is {self.max_length!r}' )
		if self.keypad:
			# the terminator can never be part of a dialed sequence
			bad = [ c for c in rawvalue if c not in KEYPAD or c == '#' ]
			if bad:
				raise ValidationError( f'{self.label} may only contain 0-9 and *, got {rawvalue!r}' )
		return rawvalue


class IntField( Field ):
	def __init__( self, label: str, min: int, max: int ) -> None:
		super().__init__( label, required = True )
		self.min = min
		self.max = max
	
	def validate( self, rawvalue: Union[None,int,str] ) -> Union[None,int,str]:
		if isinstance( rawvalue, bool ) or not isinstance( rawvalue, int ):
			raise ValidationError( f'{self.label} must be a whole number, got {rawvalue!r}' )
		if not self.min <= rawvalue <= self.max:
			raise ValidationError( f'{self.label} must be between {self.min!r} and {self.max!r}' )
		return rawvalue
