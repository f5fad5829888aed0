from typing import Annotated, Optional

from pydantic import StringConstraints

# Trimmed, must not be blank
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Trimmed free text; blank is allowed
OptionalText = Optional[Annotated[str, StringConstraints(strip_whitespace=True)]]
