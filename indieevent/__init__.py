"""IndieEvent: API de paiement des billets d'événements en ligne."""
