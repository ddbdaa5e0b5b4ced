# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant l'appel à create_all au démarrage de l'API.

from app.models.record import Record  # noqa: F401
