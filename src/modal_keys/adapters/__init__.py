"""Host adapters that connect a ModalSession to a concrete UI."""
