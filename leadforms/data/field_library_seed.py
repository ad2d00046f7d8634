STANDARD_FIELDS = [
    {
        "name": "email",
        "label": "Email",
        "data_type": "email",
        "default_placeholder": "you@example.com",
        "default_validation": {"required": True, "maxLength": 255},
        "translations": {
            "es": {"label": "Correo electrónico", "placeholder": "tu@ejemplo.com"},
            "fr": {"label": "E-mail", "placeholder": "vous@exemple.com"},
        },
        "category": "contact",
    },
    {
        "name": "firstName",
        "label": "First Name",
        "data_type": "text",
        "default_placeholder": "Enter your first name",
        "default_validation": {"maxLength": 100},
        "translations": {
            "es": {"label": "Nombre", "placeholder": "Introduce tu nombre"},
            "fr": {"label": "Prénom", "placeholder": "Entrez votre prénom"},
        },
        "category": "contact",
    },
    {
        "name": "lastName",
        "label": "Last Name",
        "data_type": "text",
        "default_placeholder": "Enter your last name",
        "default_validation": {"maxLength": 100},
        "translations": {
            "es": {"label": "Apellido", "placeholder": "Introduce tu apellido"},
            "fr": {"label": "Nom", "placeholder": "Entrez votre nom"},
        },
        "category": "contact",
    },
    {
        "name": "phone",
        "label": "Phone",
        "data_type": "phone",
        "default_placeholder": "+15551234567",
        "default_validation": {},
        "translations": {
            "es": {"label": "Teléfono"},
            "fr": {"label": "Téléphone"},
        },
        "category": "contact",
    },
    {
        "name": "company",
        "label": "Company",
        "data_type": "text",
        "default_placeholder": "Company name",
        "default_validation": {"maxLength": 255},
        "translations": {
            "es": {"label": "Empresa", "placeholder": "Nombre de la empresa"},
            "fr": {"label": "Entreprise", "placeholder": "Nom de l'entreprise"},
        },
        "category": "business",
    },
    {
        "name": "jobTitle",
        "label": "Job Title",
        "data_type": "text",
        "default_placeholder": "Your role",
        "default_validation": {"maxLength": 255},
        "translations": {
            "es": {"label": "Cargo"},
            "fr": {"label": "Poste"},
        },
        "category": "business",
    },
    {
        "name": "country",
        "label": "Country",
        "data_type": "select",
        "default_placeholder": None,
        "default_validation": {},
        "enum_list": ["United States", "Canada", "Mexico", "Spain", "France"],
        "translations": {
            "es": {
                "label": "País",
                "options": ["Estados Unidos", "Canadá", "México", "España", "Francia"],
            },
            "fr": {
                "label": "Pays",
                "options": ["États-Unis", "Canada", "Mexique", "Espagne", "France"],
            },
        },
        "category": "contact",
    },
    {
        "name": "message",
        "label": "Message",
        "data_type": "textarea",
        "default_placeholder": "How can we help?",
        "default_validation": {"maxLength": 2000},
        "translations": {
            "es": {"label": "Mensaje", "placeholder": "¿Cómo podemos ayudarte?"},
            "fr": {"label": "Message", "placeholder": "Comment pouvons-nous vous aider ?"},
        },
        "category": "general",
    },
    {
        "name": "subscribe",
        "label": "Subscribe to updates",
        "data_type": "checkbox",
        "default_placeholder": None,
        "default_validation": {},
        "translations": {
            "es": {"label": "Suscribirse a novedades"},
            "fr": {"label": "S'abonner aux nouveautés"},
        },
        "category": "marketing",
    },
]
