import re
from typing import Union
from datetime import timedelta

# One "<magnitude><unit>" group, e.g. "5s", "1.5h" or "300ms"
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h|d)", re.ASCII)
_DURATION = re.compile(r"([+-]?)((?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|ms|s|m|h|d))+)", re.ASCII)

_UNIT_SECONDS = {
	'ns': 1e-9,
	'us': 1e-6,
	'µs': 1e-6,
	'ms': 1e-3,
	's': 1,
	'm': 60,
	'h': 3600,
	'd': 86400,
}

def to_timedelta(duration: str) -> Union[timedelta, None]:
	"""
	Transform a duration string in a `timedelta` object.

	The string is a sequence of decimal numbers, each followed by a unit
	(``ns``, ``us``, ``ms``, ``s``, ``m``, ``h`` or ``d``), with an optional
	leading sign: ``"5s"``, ``"1m30s"``, ``"-1.5h"``.

	Parameters
	----------
	duration: `str`
		Duration expression

	Returns
	-------
	delta: `timedelta` or `None`
		The time delta corresponding to the expression, None if malformed.
	"""
	match = _DURATION.fullmatch(duration.strip())
	if not match:
		return None

	sign, body = match.groups()
	seconds = sum(float(quantity) * _UNIT_SECONDS[unit]
				  for quantity, unit in _DURATION_PART.findall(body))

	delta = timedelta(seconds=seconds)
	return -delta if sign == '-' else delta

def timedelta_to_str(delta: timedelta) -> str:
	"""
	Convert a timedelta object into its compact duration expression.

	Parameters
	----------
	delta: `timedelta`
		The timedelta object to be converted.

	Returns
	-------
	duration: `str`
		The expression, e.g. ``"5s"`` or ``"1h30m"``; ``"0s"`` for a zero delta.
	"""
	micros = abs(delta) // timedelta(microseconds=1)
	sign = '-' if delta < timedelta(0) else ''

	days, micros = divmod(micros, 86400 * 10**6)
	hours, micros = divmod(micros, 3600 * 10**6)
	minutes, micros = divmod(micros, 60 * 10**6)
	seconds, micros = divmod(micros, 10**6)

	parts = []
	if days:
		parts.append(f"{days}d")
	if hours:
		parts.append(f"{hours}h")
	if minutes:
		parts.append(f"{minutes}m")
	if micros:
		# Fixed-point so the fraction parses back, e.g. "0.000001s"
		parts.append(f"{seconds}.{micros:06d}".rstrip('0') + 's')
	elif seconds:
		parts.append(f"{seconds}s")

	return sign + ''.join(parts) if parts else '0s'
