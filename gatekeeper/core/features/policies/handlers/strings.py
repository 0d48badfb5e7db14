# (c) Copyright Datacraft, 2026
"""String operators: contains, not_contains, starts_with, ends_with, matches."""
import re

from ..coerce import to_string
from ..errors import InvalidRegexError, PolicyError
from ..operators import Operator


class StringHandler:
	"""
	Evaluates the string operators.

	A missing attribute evaluates to False rather than raising, so a policy
	can test a string attribute without asserting that it exists. Both sides
	are converted with to_string first; ``matches`` searches the attribute
	for the pattern given as the value (unanchored, Python ``re`` syntax).
	"""

	def evaluate(self, condition, resolver) -> bool:
		actual, present = resolver.resolve(condition.attribute)
		if not present:
			return False

		text = to_string(actual)
		needle = to_string(condition.value)
		op = str(condition.operator)

		match condition.operator:
			case Operator.CONTAINS:
				return needle in text
			case Operator.NOT_CONTAINS:
				return needle not in text
			case Operator.STARTS_WITH:
				return text.startswith(needle)
			case Operator.ENDS_WITH:
				return text.endswith(needle)
			case Operator.MATCHES:
				try:
					pattern = re.compile(needle)
				except re.error as e:
					raise InvalidRegexError(
						f"invalid pattern {needle!r}: {e}",
						operator=op,
						attribute=condition.attribute,
					) from e
				return pattern.search(text) is not None
			case _:
				raise PolicyError(f"unsupported string operator: {op}", operator=op)
