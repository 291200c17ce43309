"""Source-switching recipes for individual operating systems and tools."""