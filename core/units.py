LBS_PER_KG = 2.20462

def weight_value(kg, in_lbs):
    """Converts a stored (kg) weight to the display unit."""
    return kg * LBS_PER_KG if in_lbs else kg

def weight_to_kg(value, in_lbs):
    """Converts a weight entered in the display unit back to kg."""
    return value / LBS_PER_KG if in_lbs else value

def weight_unit(in_lbs):
    return "lbs" if in_lbs else "kg"

def formatted_weight(kg, in_lbs):
    return "%.1f %s" % (weight_value(kg, in_lbs), weight_unit(in_lbs))

def formatted_rest_time(seconds):
    minutes, remaining = divmod(int(seconds), 60)
    if minutes > 0:
        return f"{minutes}m {remaining}s"
    return f"{remaining}s"

def display_time(total_seconds):
    """Countdown label, e.g. 90 -> '1:30'."""
    minutes, seconds = divmod(int(total_seconds), 60)
    return "%01d:%02d" % (minutes, seconds)

def capitalize_words(text):
    """'incline bench press' -> 'Incline Bench Press'."""
    return " ".join(w[:1].upper() + w[1:] for w in text.strip().split())
