from .encrypted_int import demo

demo()
