"""
Sequential ID Allocator Module.

Hands out one object identifier per shipment folder that reaches payload
building. IDs are zero-padded decimal strings; values wider than the pad
width are returned in full, never truncated.
"""

from typing import Optional

from config import get_config


class SequentialIdAllocator:
    """
    Monotonically increasing, zero-padded ID source.
    
    The allocator is not thread safe. One instance is shared by every
    folder of a run and used strictly sequentially.
    
    Attributes:
        start: First value handed out.
        width: Minimum number of digits of a formatted ID.
        
    Example:
        >>> allocator = SequentialIdAllocator(start=80, width=4)
        >>> allocator.next()
        '0080'
        >>> allocator.next()
        '0081'
    """
    
    def __init__(
        self,
        start: Optional[int] = None,
        width: Optional[int] = None
    ) -> None:
        """
        Initialize the allocator.
        
        Args:
            start: Override config for the starting value.
            width: Override config for the zero-pad width.
            
        Raises:
            ValueError: If start is negative or width is below 1.
        """
        self.start = int(start if start is not None else
                         get_config("id_allocator.start_index", 80))
        self.width = int(width if width is not None else
                         get_config("id_allocator.pad_width", 4))
        
        if self.start < 0:
            raise ValueError(f"start must not be negative, got {self.start}")
        if self.width < 1:
            raise ValueError(f"width must be at least 1, got {self.width}")
        
        self._counter = self.start
    
    @property
    def current(self) -> int:
        """Value the next call to next() will format."""
        return self._counter
    
    @property
    def allocated(self) -> int:
        """Number of IDs handed out so far."""
        return self._counter - self.start
    
    def format(self, value: int) -> str:
        """Format a value with the configured zero padding."""
        return str(value).zfill(self.width)
    
    def peek(self) -> str:
        """Return the next ID without consuming it."""
        return self.format(self._counter)
    
    def next(self) -> str:
        """
        Consume and return the next ID.
        
        Returns:
            The pre-increment counter, zero-padded to the configured width.
        """
        allocated_id = self.format(self._counter)
        self._counter += 1
        return allocated_id
    
    def __repr__(self) -> str:
        return (
            f"SequentialIdAllocator(start={self.start}, "
            f"width={self.width}, next={self.peek()!r})"
        )
