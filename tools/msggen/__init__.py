"""
msggen: Windows event-message build step.

Compiles a message definition (.mc) file into a message-table resource
library with the platform message and resource compilers (or their
MinGW-w64 counterparts when cross compiling), and translates the generated
header into Rust ``u32`` constants stamped with the source file's SHA-256.
"""
