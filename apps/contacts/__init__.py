"""Contact inbox: messages left by visitors through the public contact form."""
