"""Amount representations.

`Money` (arbitrary-precision decimal), `FastMoney` (fixed-point, 5 fraction digits) and
`RoundedMoney` (decimal that rounds its arithmetic results) share the structural
`MonetaryAmount` protocol and convert into each other explicitly.
"""
