"""Next-bus countdown for Metro Transit routes via the NexTrip v2 service."""
