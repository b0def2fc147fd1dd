"""GitHub gateway for the one hosting API call forkflow makes: creating a fork."""
