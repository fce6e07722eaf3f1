"""filevault: versioned file resolution with a write-once content cache."""
