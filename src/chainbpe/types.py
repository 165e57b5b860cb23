"""
Core types for the merge engine.
"""

type TokenId = int
type PositionId = int
type TokenValue = str
type ValuePair = tuple[TokenValue, TokenValue]
type PairCounts = dict[ValuePair, int]
