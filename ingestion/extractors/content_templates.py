"""
Hand-authored site content used to seed the pages.

The legacy Word documents are not parsed; these templates stand in for
them. Keys are page -> section -> text.
"""

COMPANY_NAME = "Yahska Polymers Private Limited"

CONTENT_TEMPLATES = {
    "home": {
        "hero_title": "Construction Chemicals & Industrial Solutions Since 2003",
        "hero_subtitle": (
            "Concrete admixtures, waterproofing systems, textile and dyestuff chemicals "
            "trusted by India's largest infrastructure projects."
        ),
        "introduction": (
            f"{COMPANY_NAME} manufactures construction chemicals, concrete admixtures, "
            "textile chemicals and dyestuff chemicals from its facility in Gujarat. Our "
            "products are in use on bullet train, metro rail, highway and building "
            "projects across India."
        ),
    },
    "about": {
        "company_overview": (
            f"{COMPANY_NAME}, established in 2003, is a leading manufacturer and supplier "
            "of construction chemicals, concrete admixtures, textile chemicals, and dyestuff "
            "chemicals. With over 20 years of experience in the industry, we have become a "
            "trusted partner for major infrastructure projects across India.\n\n"
            "Our manufacturing facilities in Gujarat are equipped with modern technology "
            "and quality control systems to ensure consistent product quality."
        ),
        "mission_statement": (
            "To provide innovative, high-quality chemical solutions that enhance construction "
            "efficiency, improve product performance, and contribute to sustainable "
            "infrastructure development while maintaining the highest standards of safety "
            "and environmental responsibility."
        ),
        "vision_statement": (
            "To be the most trusted and preferred partner in chemical manufacturing, "
            "recognized for innovation, quality, and commitment to customer success in "
            "construction and industrial applications."
        ),
        "core_values": (
            "Quality Excellence: We maintain rigorous quality standards in all our products and services.\n"
            "Innovation: We continuously invest in research and development.\n"
            "Customer Focus: We prioritize customer satisfaction through superior products and technical support.\n"
            "Environmental Responsibility: We are committed to sustainable manufacturing practices.\n"
            "Integrity: We conduct business with transparency, honesty, and ethical practices."
        ),
        "quality_commitment": (
            "Our quality management system encompasses:\n\n"
            "• ISO 9001:2015 certified manufacturing processes\n"
            "• Stringent raw material selection and testing\n"
            "• Advanced laboratory testing facilities\n"
            "• Continuous process monitoring and improvement\n"
            "• Customer feedback integration"
        ),
    },
    "products": {
        "product_overview": (
            "Yahska Polymers offers a comprehensive range of chemical solutions designed for "
            "construction, textile, and industrial applications.\n\n"
            "Construction Chemicals:\n"
            "• Concrete admixtures for enhanced workability and strength\n"
            "• Waterproofing compounds for lasting protection\n"
            "• Repair mortars for structural rehabilitation\n"
            "• Curing compounds for optimal concrete development\n\n"
            "Textile Chemicals:\n"
            "• Dispersing agents for even dye distribution\n"
            "• Processing aids for improved fabric properties"
        ),
        "quality_standards": (
            "All our products are manufactured under strict quality control measures:\n\n"
            "• Raw materials sourced from certified suppliers\n"
            "• In-process quality checks at every stage\n"
            "• Compliance with BIS, ASTM, and international standards\n"
            "• Technical data sheets and safety information provided"
        ),
        "technical_support": (
            "Our technical team provides product selection guidance, application training, "
            "on-site technical assistance, customization for specific project requirements "
            "and after-sales support."
        ),
    },
    "projects": {
        "project_overview": (
            "Yahska Polymers has supplied chemical solutions for numerous prestigious "
            "infrastructure projects across India, including highways, metro systems, "
            "high-rise buildings, and industrial facilities.\n\n"
            "Key Project Categories:\n"
            "• Bullet Train Projects (NHSRCL Mumbai-Ahmedabad corridor)\n"
            "• Metro Rail Systems (Delhi, Mumbai, Ahmedabad, Surat, Jaipur)\n"
            "• Highway and Expressway Construction\n"
            "• Commercial and Residential Buildings"
        ),
        "project_achievements": (
            "Transportation Infrastructure:\n"
            "• Mumbai-Ahmedabad High Speed Rail (Bullet Train)\n"
            "• Delhi Metro Rail Corporation projects\n"
            "• Ahmedabad-Gandhinagar Metro\n\n"
            "Commercial Projects:\n"
            "• GIFT City development projects\n"
            "• Airport infrastructure development"
        ),
    },
    "approvals": {
        "certifications_overview": (
            "Yahska Polymers maintains all necessary certifications and approvals to serve "
            "major infrastructure projects. Our products and manufacturing processes comply "
            "with national and international standards."
        ),
        "government_approvals": (
            "Railway Authorities:\n"
            "• Delhi Metro Rail Corporation (DMRC)\n"
            "• National High Speed Rail Corporation Limited (NHSRCL)\n"
            "• Rail Vikas Nigam Limited (RVNL)\n\n"
            "Municipal Authorities:\n"
            "• Mumbai Metropolitan Region Development Authority (MMRDA)\n"
            "• Brihanmumbai Municipal Corporation (BMC)\n"
            "• Gujarat Metro Rail Corporation (GMRC)"
        ),
    },
    "clients": {
        "client_overview": (
            "Yahska Polymers serves a diverse portfolio of clients across India, including "
            "leading construction companies, infrastructure developers, cement manufacturers, "
            "and engineering consultancies."
        ),
        "partnership_approach": (
            "Our Partnership Philosophy:\n"
            "• Long-term relationship building\n"
            "• Customized solutions for specific requirements\n"
            "• Technical support throughout project lifecycle\n"
            "• Timely delivery and logistics support"
        ),
    },
    "contact": {
        "contact_information": (
            f"{COMPANY_NAME}\n\n"
            "Head Office:\nAhmedabad, Gujarat, India\n\n"
            "Email: info@yahskapolymers.com\n"
            "Website: www.yahskapolymers.com"
        ),
        "business_hours": (
            "Monday to Friday: 9:00 AM - 6:00 PM\n"
            "Saturday: 9:00 AM - 1:00 PM\n"
            "Sunday: Closed"
        ),
    },
}

COMPANY_INFO = {
    # Basic information
    "company_name": COMPANY_NAME,
    "established_year": "2003",
    "years_of_experience": "20+",
    "legal_status": "Private Limited Company",
    # Business information
    "primary_business": (
        "Manufacturing of Construction Chemicals, Concrete Admixtures, "
        "Textile Chemicals, and Dyestuff Chemicals"
    ),
    "manufacturing_location": "Ahmedabad, Gujarat, India",
    "employee_count": "50+",
    "export_countries": "UAE, Bangladesh, Sri Lanka",
    # Contact information
    "head_office_address": "Ahmedabad, Gujarat, India - 380001",
    "email_general": "info@yahskapolymers.com",
    "email_technical": "technical@yahskapolymers.com",
    "email_sales": "sales@yahskapolymers.com",
    "website": "www.yahskapolymers.com",
    # Certifications
    "iso_certification": "ISO 9001:2015 Certified",
    "quality_policy": (
        "Committed to delivering high-quality chemical solutions through "
        "innovation and customer focus"
    ),
    "environmental_policy": "Sustainable manufacturing practices with minimal environmental impact",
    # Statistics
    "product_categories": "11+",
    "active_projects": "100+",
    "client_companies": "43+",
    "government_approvals": "12+",
    "manufacturing_capacity": "10,000 MT per annum",
    # Market presence
    "market_segments": "Construction, Infrastructure, Textiles, Industrial Manufacturing",
    "service_areas": "Pan India with focus on Western and Northern regions",
    "distribution_network": "Direct sales and authorized distributors",
}

SEO_SETTINGS = {
    "home": {
        "title": "Yahska Polymers - Construction Chemicals Manufacturer",
        "description": (
            "Yahska Polymers manufactures construction chemicals, concrete admixtures, "
            "textile and dyestuff chemicals for infrastructure projects across India."
        ),
        "keywords": "construction chemicals, concrete admixtures, textile chemicals, dyestuff chemicals, Yahska Polymers",
        "og_title": "Yahska Polymers - Construction Chemicals & Industrial Solutions",
        "og_description": "Leading manufacturer of construction chemicals and industrial solutions for infrastructure projects across India.",
    },
    "about": {
        "title": "About Yahska Polymers - Chemical Manufacturing Since 2003",
        "description": (
            "Learn about Yahska Polymers, an ISO certified manufacturer of construction "
            "chemicals established in 2003 and based in Ahmedabad, Gujarat, India."
        ),
        "keywords": "about Yahska Polymers, chemical manufacturer Ahmedabad, ISO certified manufacturer",
        "og_title": "About Yahska Polymers - Chemical Manufacturing Excellence Since 2003",
        "og_description": "Two decades of chemical manufacturing for prestigious infrastructure projects.",
    },
    "products": {
        "title": "Construction Chemicals & Admixtures | Yahska Polymers",
        "description": (
            "Range of construction chemicals, concrete admixtures, textile chemicals and "
            "dyestuff chemicals for infrastructure and industrial applications in India."
        ),
        "keywords": "construction chemicals, concrete admixtures, waterproofing chemicals, textile chemicals",
        "og_title": "Premium Construction Chemicals & Industrial Solutions",
        "og_description": "Construction chemicals, concrete admixtures and specialized industrial solutions.",
    },
    "projects": {
        "title": "Infrastructure Project Portfolio | Yahska Polymers",
        "description": (
            "Project portfolio of Yahska Polymers chemical solutions on bullet train, metro "
            "rail, highway and building construction projects across India over 20 years."
        ),
        "keywords": "infrastructure projects, bullet train chemicals, metro rail projects, highway construction",
        "og_title": "Infrastructure Projects - Yahska Polymers Success Stories",
        "og_description": "Chemical solutions for bullet trains, metro systems and highway construction.",
    },
    "clients": {
        "title": "Our Clients - Trusted Construction Partners",
        "description": (
            "Yahska Polymers serves leading construction companies, cement manufacturers "
            "and infrastructure developers including L&T, Tata Projects and Shapoorji."
        ),
        "keywords": "construction clients, infrastructure partners, cement companies, L&T, Tata Projects",
        "og_title": "Trusted by Leading Construction Companies Across India",
        "og_description": "Top construction companies, cement manufacturers and infrastructure developers.",
    },
    "approvals": {
        "title": "Certifications & Government Approvals | Yahska",
        "description": (
            "Yahska Polymers holds approvals from DMRC, NHSRCL, MMRDA and other government "
            "authorities, backed by an ISO certified quality management system in Gujarat."
        ),
        "keywords": "government approvals, DMRC certified, NHSRCL approved, MMRDA certification, ISO certified",
        "og_title": "Government Approvals & Quality Certifications",
        "og_description": "Approvals and quality certifications from leading authorities.",
    },
    "contact": {
        "title": "Contact Yahska Polymers - Chemical Solutions Quote",
        "description": (
            "Contact Yahska Polymers for construction chemicals, concrete admixtures and "
            "industrial solutions. Located in Ahmedabad, Gujarat with technical support."
        ),
        "keywords": "contact Yahska Polymers, construction chemicals quote, technical support",
        "og_title": "Contact Us - Yahska Polymers Chemical Solutions",
        "og_description": "Expert chemical solutions, technical support and competitive quotes.",
    },
}

PRODUCT_CATEGORIES = [
    {"id": "construction", "name": "Construction Chemicals", "sort_order": 1,
     "description": "Waterproofing, grouts, curing compounds, floor hardeners and repair systems"},
    {"id": "concrete", "name": "Concrete Admixtures", "sort_order": 2,
     "description": "Plasticizers, superplasticizers, accelerators and retarders"},
    {"id": "dispersing", "name": "Dispersing Agents", "sort_order": 3,
     "description": "Dispersing agents for dyes and pigments"},
    {"id": "textile", "name": "Textile Chemicals", "sort_order": 4,
     "description": "Processing aids and finishing chemicals for textiles"},
    {"id": "dyestuff", "name": "Dyestuff Chemicals", "sort_order": 5,
     "description": "Chemicals for dyestuff manufacturing"},
]

PROJECT_CATEGORIES = [
    {"id": "bullet_train", "name": "Bullet Train", "sort_order": 1,
     "description": "High speed rail corridor projects"},
    {"id": "metro_rail", "name": "Metro & Rail", "sort_order": 2,
     "description": "Metro rail and railway infrastructure"},
    {"id": "roads", "name": "Roads", "sort_order": 3,
     "description": "Highways, expressways and road infrastructure"},
    {"id": "buildings_infra", "name": "Buildings & Infrastructure", "sort_order": 4,
     "description": "Commercial, residential and industrial buildings"},
    {"id": "others", "name": "Others", "sort_order": 5,
     "description": "Other construction projects"},
]
